# utils/attio.py
import logging
from typing import Any, Dict, Optional
import requests
from utils.errors import UpstreamError

log = logging.getLogger(__name__)


def _error_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


def _first_id(payload: Dict[str, Any], key: str) -> Optional[str]:
    rows = payload.get("data") or []
    if not rows:
        return None
    return (rows[0].get("id") or {}).get(key)


class AttioClient:
    def __init__(self, api_key: str, domain_attribute: str = "domains",
                 base_url: str = "https://api.attio.com",
                 timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.domain_attribute = domain_attribute
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def _call(self, method: str, path: str, body: Dict[str, Any], operation: str) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            log.error("Attio request failed while %s: %s", operation, e)
            raise UpstreamError(operation, str(e))
        if not resp.ok:
            detail = _error_body(resp)
            log.error("Attio returned %s while %s: %s", resp.status_code, operation, detail)
            raise UpstreamError(operation, detail, status=resp.status_code)
        return resp.json()

    def find_company_by_domain(self, domain: str) -> Optional[str]:
        # limit 1: if several companies share the domain Attio's ordering decides
        data = self._call(
            "POST", "/v2/objects/companies/records/query",
            {"filter": {self.domain_attribute: {"$contains": domain}}, "limit": 1},
            "searching company",
        )
        return _first_id(data, "record_id")

    def find_list_entry(self, list_id: str, company_id: str) -> Optional[str]:
        data = self._call(
            "POST", f"/v2/lists/{list_id}/entries/query",
            {
                "filter": {
                    "parent_record": {
                        "target_object": "companies",
                        "target_record_id": company_id,
                    }
                },
                "limit": 1,
            },
            "searching list entry",
        )
        return _first_id(data, "entry_id")

    def update_entry(self, list_id: str, entry_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
        return self._call(
            "PATCH", f"/v2/lists/{list_id}/entries/{entry_id}",
            {"data": {"values": values}},
            "updating entry",
        )
