# tests/test_config.py

import pytest
from pydantic import ValidationError

from utils.config import load_settings, parse_field_mappings
from utils.errors import ConfigurationError
from utils.field_map import FIELD_ID_MAP

ENV = {
    "ATTIO_API_KEY": "k",
    "ATTIO_LIST_ID": "l",
    "FILLOUT_DOMAIN_FIELD_ID": "6aYW",
}


def test_defaults():
    s = load_settings(dict(ENV))
    assert s.domain_attribute == "domains"
    assert s.base_url == "https://api.attio.com"
    assert s.timeout == 30.0
    assert s.field_mappings == FIELD_ID_MAP


def test_missing_required_are_all_named():
    with pytest.raises(ConfigurationError) as exc:
        load_settings({"ATTIO_API_KEY": "k"})
    assert "ATTIO_LIST_ID" in exc.value.message
    assert "FILLOUT_DOMAIN_FIELD_ID" in exc.value.message
    assert exc.value.status_code == 500


def test_overrides():
    env = dict(ENV, ATTIO_DOMAIN_ATTRIBUTE="website", ATTIO_BASE_URL="https://x.test/",
               ATTIO_TIMEOUT="2.5", FILLOUT_FIELD_MAPPINGS='{"abc": "notes"}')
    s = load_settings(env)
    assert s.domain_attribute == "website"
    assert s.base_url == "https://x.test"
    assert s.timeout == 2.5
    assert s.field_mappings == {"abc": "notes"}


def test_bad_timeout():
    with pytest.raises(ConfigurationError):
        load_settings(dict(ENV, ATTIO_TIMEOUT="soon"))


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '{"a": 1}'])
def test_bad_mappings(raw):
    with pytest.raises(ConfigurationError):
        parse_field_mappings(raw)


def test_settings_are_frozen():
    s = load_settings(dict(ENV))
    with pytest.raises(ValidationError):
        s.list_id = "other"


def test_mappings_view_is_read_only():
    s = load_settings(dict(ENV))
    view = s.mappings()
    with pytest.raises(TypeError):
        view["new"] = "attr"
