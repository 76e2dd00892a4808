# utils/webhook.py
import json, logging
from functools import lru_cache
from typing import Any, Dict
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from utils.config import Settings, load_settings
from utils.core import Relay
from utils.errors import ClientPayloadError, RelayError

log = logging.getLogger(__name__)
router = APIRouter()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # read once per process; missing env -> ConfigurationError on first request
    return load_settings()


def get_relay(settings: Settings = Depends(get_settings)) -> Relay:
    # one Relay (and requests.Session) per request; sessions are not shared across threadpool workers
    return Relay(settings)


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw or b"null")
    except ValueError as e:
        raise ClientPayloadError("Invalid JSON body", f"Request body is not valid JSON: {e}")


@router.post("")
async def fillout_webhook(request: Request, relay: Relay = Depends(get_relay)):
    payload = await _read_json(request)
    dry_run = request.query_params.get("dry_run") in ("1", "true", "True")
    log.debug("Raw Fillout body: %s", payload)

    try:
        result: Dict[str, Any] = await run_in_threadpool(relay.process, payload, dry_run)
    except RelayError:
        raise
    except Exception as e:
        log.exception("Error processing webhook")
        return JSONResponse(status_code=500, content=RelayError(str(e)).body())
    return result


@router.api_route("", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def method_not_allowed():
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})


# manual testing from a browser or curl; never touches Attio
@router.api_route("/echo", methods=["GET", "POST"])
async def echo(request: Request):
    if request.method == "POST":
        raw = await request.body()
        log.info("Echo body received: %s", raw.decode("utf-8", "replace"))
        return {"ok": True, "message": "Webhook received (POST)", "method": "POST"}
    return {"ok": True, "message": "Route /webhook exists (GET)", "method": "GET"}
