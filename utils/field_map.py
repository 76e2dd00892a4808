# utils/field_map.py
import logging
from typing import Any, Dict, List, Mapping
from utils.schema import Question

log = logging.getLogger(__name__)

# Fillout question id -> Attio list attribute slug.
# Overridden at deploy time by FILLOUT_FIELD_MAPPINGS (JSON).
FIELD_ID_MAP = {
    "wrV6": "hdd_evaluation_1",     # HDD evaluation, part 1
    "6rxp": "hdd_evaluation_2",     # HDD evaluation, part 2
}


def _find(questions: List[Question], qid: str):
    for q in questions:
        if q.id == qid:
            return q
    return None


def map_explicit(questions: List[Question], mappings: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for qid, attribute in mappings.items():
        q = _find(questions, qid)
        if q is not None and q.value is not None:
            out[attribute] = q.value
            log.info("Mapping %s (%s) -> %s = %r", qid, q.name, attribute, q.value)
    return out


def map_automatic(questions: List[Question], domain_field_id: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for q in questions:
        if q.id == domain_field_id or not q.value:
            continue
        key = q.name or q.id
        if not key:
            continue
        out[key] = q.value
        log.info("Auto-mapped %s = %r", key, q.value)
    return out


def build_update_set(questions: List[Question], mappings: Mapping[str, str],
                     domain_field_id: str) -> Dict[str, Any]:
    """
    Explicit mappings win. Only when none of them matched do we fall back to
    mapping every answered question (except the domain one) by name, or id.
    """
    values = map_explicit(questions, mappings)
    if not values:
        log.warning("No explicit field mapping matched, using automatic mapping")
        values = map_automatic(questions, domain_field_id)
    return values
