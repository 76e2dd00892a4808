import logging
from fastapi import FastAPI
from utils.config import LOG_LEVEL
from utils.errors import RelayError
from utils.webhook import router as webhook_router, relay_error_handler

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI()

@app.get("/")
def health():
    return {"status": "ok"}

app.add_exception_handler(RelayError, relay_error_handler)

# Fillout posts to /webhook
app.include_router(webhook_router, prefix="/webhook")
