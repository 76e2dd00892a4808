# utils/payload.py
import logging
from typing import Any, Callable, Dict, List, Optional
from pydantic import ValidationError
from utils.errors import ClientPayloadError
from utils.schema import Question

log = logging.getLogger(__name__)

Matcher = Callable[[Dict[str, Any]], Optional[List[Any]]]


# Fillout sends one of three shapes depending on where the webhook comes from.

def _flat(body: Dict[str, Any]) -> Optional[List[Any]]:
    # { questions: [...] }
    qs = body.get("questions")
    return qs if isinstance(qs, list) else None

def _responses(body: Dict[str, Any]) -> Optional[List[Any]]:
    # { responses: [ { questions: [...] }, ... ] }  (API export format)
    rs = body.get("responses")
    if isinstance(rs, list) and rs and isinstance(rs[0], dict):
        qs = rs[0].get("questions")
        return qs if isinstance(qs, list) else None
    return None

def _response(body: Dict[str, Any]) -> Optional[List[Any]]:
    # { response: { questions: [...] } }
    r = body.get("response")
    if isinstance(r, dict):
        qs = r.get("questions")
        return qs if isinstance(qs, list) else None
    return None

MATCHERS: List[Matcher] = [_flat, _responses, _response]


def _question(index: int, raw: Dict[str, Any]) -> Question:
    try:
        return Question.model_validate(raw)
    except ValidationError as e:
        bad = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ClientPayloadError(
            "Invalid question",
            f"Question at position {index} has invalid fields: {bad}",
            received_fields=[{"id": raw.get("id"), "name": raw.get("name")}],
        )


def normalize_questions(body: Any) -> List[Question]:
    if not isinstance(body, dict):
        return []
    for match in MATCHERS:
        raw = match(body)
        if raw is not None:
            return [_question(i, q) for i, q in enumerate(raw) if isinstance(q, dict)]
    return []


def require_questions(body: Any) -> List[Question]:
    questions = normalize_questions(body)
    if not questions:
        log.warning("No questions found in Fillout payload")
        raise ClientPayloadError(
            "No questions in payload",
            "No questions were found in the body received from Fillout. "
            "Check the payload format and the domain field id.",
            received_keys=sorted(body.keys()) if isinstance(body, dict) else [],
        )
    return questions


def resolve_domain(questions: List[Question], domain_field_id: str) -> str:
    for q in questions:
        if q.id != domain_field_id:
            continue
        if not q.value:
            break
        domain = str(q.value).strip()
        if domain:
            return domain
        break

    raise ClientPayloadError(
        "Domain not provided",
        f"No domain field found with id: {domain_field_id}",
        received_fields=[q.summary(with_value=True) for q in questions],
    )
