# utils/errors.py
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RelayError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def body(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "timestamp": _now_iso()}


class ClientPayloadError(RelayError):
    """Inbound submission is missing something we need (400)."""
    status_code = 400

    def __init__(self, error: str, message: str,
                 received_fields: Optional[List[Dict[str, Any]]] = None,
                 received_keys: Optional[List[str]] = None):
        super().__init__(message)
        self.error = error
        self.received_fields = received_fields
        self.received_keys = received_keys

    def body(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.received_fields is not None:
            out["receivedFields"] = self.received_fields
        if self.received_keys is not None:
            out["receivedKeys"] = self.received_keys
        return out


class NotFoundError(RelayError):
    status_code = 404

    def __init__(self, error: str, message: str,
                 company_id: Optional[str] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.error = error
        self.company_id = company_id
        self.hint = hint

    def body(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.company_id:
            out["companyId"] = self.company_id
        if self.hint:
            out["hint"] = self.hint
        return out


class UpstreamError(RelayError):
    """Attio answered with a non-2xx status, or could not be reached."""
    status_code = 500

    def __init__(self, operation: str, detail: Any, status: Optional[int] = None):
        text = detail if isinstance(detail, str) else json.dumps(detail, default=str)
        super().__init__(f"Error {operation}: {text}")
        self.operation = operation
        self.detail = detail
        self.status = status

    def body(self) -> Dict[str, Any]:
        out = super().body()
        out["upstream"] = self.detail
        return out


class ConfigurationError(RelayError):
    status_code = 500
