import os, json
from typing import Dict, Optional
from types import MappingProxyType
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from utils.errors import ConfigurationError
from utils.field_map import FIELD_ID_MAP

load_dotenv()

ATTIO_API_KEY           = os.getenv('ATTIO_API_KEY', '')
ATTIO_LIST_ID           = os.getenv('ATTIO_LIST_ID', '')
FILLOUT_DOMAIN_FIELD_ID = os.getenv('FILLOUT_DOMAIN_FIELD_ID', '')

ATTIO_DOMAIN_ATTRIBUTE  = os.getenv('ATTIO_DOMAIN_ATTRIBUTE', 'domains')
ATTIO_BASE_URL          = os.getenv('ATTIO_BASE_URL', 'https://api.attio.com')
ATTIO_TIMEOUT           = os.getenv('ATTIO_TIMEOUT', '30')

# JSON object {"fillout_question_id": "attio_attribute"}; empty -> FIELD_ID_MAP
FILLOUT_FIELD_MAPPINGS  = os.getenv('FILLOUT_FIELD_MAPPINGS', '')

LOG_LEVEL               = os.getenv('LOG_LEVEL', 'INFO')

REQUIRED = ("ATTIO_API_KEY", "ATTIO_LIST_ID", "FILLOUT_DOMAIN_FIELD_ID")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str
    list_id: str
    domain_field_id: str
    domain_attribute: str = "domains"
    base_url: str = "https://api.attio.com"
    timeout: float = 30.0
    field_mappings: Dict[str, str] = {}

    def mappings(self):
        return MappingProxyType(dict(self.field_mappings))


def parse_field_mappings(raw: str) -> Dict[str, str]:
    if not raw.strip():
        return dict(FIELD_ID_MAP)
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ConfigurationError(f"FILLOUT_FIELD_MAPPINGS is not valid JSON: {e}")
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigurationError("FILLOUT_FIELD_MAPPINGS must be a JSON object of strings")
    return data


def load_settings(env: Optional[Dict[str, str]] = None) -> Settings:
    """Build Settings from `env` (defaults to the values read at import)."""
    if env is None:
        env = {
            "ATTIO_API_KEY": ATTIO_API_KEY,
            "ATTIO_LIST_ID": ATTIO_LIST_ID,
            "FILLOUT_DOMAIN_FIELD_ID": FILLOUT_DOMAIN_FIELD_ID,
            "ATTIO_DOMAIN_ATTRIBUTE": ATTIO_DOMAIN_ATTRIBUTE,
            "ATTIO_BASE_URL": ATTIO_BASE_URL,
            "ATTIO_TIMEOUT": ATTIO_TIMEOUT,
            "FILLOUT_FIELD_MAPPINGS": FILLOUT_FIELD_MAPPINGS,
        }

    missing = [k for k in REQUIRED if not env.get(k)]
    if missing:
        raise ConfigurationError(
            "Missing required environment variables: " + ", ".join(missing)
        )

    try:
        timeout = float(env.get("ATTIO_TIMEOUT") or 30)
    except ValueError:
        raise ConfigurationError(f"ATTIO_TIMEOUT must be a number, got {env.get('ATTIO_TIMEOUT')!r}")

    return Settings(
        api_key=env["ATTIO_API_KEY"],
        list_id=env["ATTIO_LIST_ID"],
        domain_field_id=env["FILLOUT_DOMAIN_FIELD_ID"],
        domain_attribute=env.get("ATTIO_DOMAIN_ATTRIBUTE") or "domains",
        base_url=(env.get("ATTIO_BASE_URL") or "https://api.attio.com").rstrip("/"),
        timeout=timeout,
        field_mappings=parse_field_mappings(env.get("FILLOUT_FIELD_MAPPINGS") or ""),
    )
