# tests/conftest.py
# shared fixtures: sample Fillout payloads, settings, a recording Attio stand-in

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from utils.config import Settings  # noqa: E402


DOMAIN_FIELD_ID = "6aYW"

QUESTIONS = [
    {"id": "6aYW", "name": "domain", "type": "ShortAnswer", "value": "acme.com"},
    {"id": "wrV6", "name": "q1", "type": "LongAnswer", "value": "yes"},
]


@pytest.fixture
def questions():
    return [dict(q) for q in QUESTIONS]


@pytest.fixture
def flat_payload(questions):
    """{ questions: [...] } as sent by Fillout webhooks"""
    return {"formId": "f1", "questions": questions}


@pytest.fixture
def responses_payload(questions):
    """{ responses: [ { questions: [...] } ] } as returned by the Fillout API"""
    return {"responses": [{"submissionId": "s1", "questions": questions}], "totalResponses": 1}


@pytest.fixture
def response_payload(questions):
    """{ response: { questions: [...] } }"""
    return {"response": {"submissionId": "s1", "questions": questions}}


def make_settings(**overrides):
    base = dict(
        api_key="test-key",
        list_id="list-123",
        domain_field_id=DOMAIN_FIELD_ID,
        domain_attribute="domains",
        field_mappings={"wrV6": "hdd_evaluation_1"},
    )
    base.update(overrides)
    return Settings(**base)


@pytest.fixture
def settings():
    return make_settings()


class FakeAttio:
    """Records calls; returns the configured ids (None means not found)."""

    def __init__(self, company_id="rec-1", entry_id="ent-1", fail_on=None):
        self.company_id = company_id
        self.entry_id = entry_id
        self.fail_on = fail_on
        self.calls = []

    def _maybe_fail(self, name):
        if self.fail_on == name:
            from utils.errors import UpstreamError
            raise UpstreamError(name, {"status_code": 403, "message": "forbidden"}, status=403)

    def find_company_by_domain(self, domain):
        self.calls.append(("find_company_by_domain", domain))
        self._maybe_fail("find_company_by_domain")
        return self.company_id

    def find_list_entry(self, list_id, company_id):
        self.calls.append(("find_list_entry", list_id, company_id))
        self._maybe_fail("find_list_entry")
        return self.entry_id

    def update_entry(self, list_id, entry_id, values):
        self.calls.append(("update_entry", list_id, entry_id, values))
        self._maybe_fail("update_entry")
        return {"data": {"id": {"entry_id": entry_id}}}

    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_attio():
    return FakeAttio()
