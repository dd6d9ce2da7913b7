from __future__ import annotations

import json
import logging
from typing import Any, Hashable, List, Mapping, Set

from deal_pipeline.models import ImportResult


logger = logging.getLogger("dealpipe.import")

NOT_AN_ARRAY = "Expected array of properties"
MISSING_REQUIRED = "Missing required fields (address, city)"

# Key used for records that carry no "id" at all. Distinct from an explicit
# null id, and two records without an id collide with each other.
_NO_ID = object()


def _dedup_key(record: Mapping[str, Any]) -> Hashable:
    value = record.get("id", _NO_ID)
    try:
        hash(value)
    except TypeError:
        # Unhashable ids (lists, dicts) only ever equal themselves.
        return ("unhashable", id(value))
    if isinstance(value, bool):
        return ("bool", value)
    return value


def _has_required(record: Any) -> bool:
    if not isinstance(record, Mapping):
        return False
    return bool(record.get("address")) and bool(record.get("city"))


def import_batch(records: Any) -> ImportResult:
    """Validate an externally supplied batch and drop repeated ids.

    The batch is all-or-nothing: a non-list input or any element without a
    truthy ``address`` and ``city`` rejects the whole import. Kept records are
    the caller's own objects, in input order, first occurrence of each id
    winning; unknown keys ride along untouched.
    """
    if not isinstance(records, list):
        logger.warning("import rejected: %s", NOT_AN_ARRAY)
        return ImportResult(valid=False, error=NOT_AN_ARRAY)
    if not all(_has_required(r) for r in records):
        logger.warning("import rejected: %s", MISSING_REQUIRED)
        return ImportResult(valid=False, error=MISSING_REQUIRED)

    kept: List[Mapping[str, Any]] = []
    seen: Set[Hashable] = set()
    for record in records:
        key = _dedup_key(record)
        if key in seen:
            logger.warning("duplicate id removed: %s", record.get("id"))
            continue
        seen.add(key)
        kept.append(record)

    removed = len(records) - len(kept)
    logger.info("import accepted %s records, %s duplicates removed", len(kept), removed)
    return ImportResult(valid=True, properties=kept, duplicates_removed=removed)


def import_json(text: str) -> ImportResult:
    """Parse a JSON backup and run it through :func:`import_batch`."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        logger.warning("import rejected: invalid JSON (%s)", exc)
        return ImportResult(valid=False, error=f"Invalid JSON: {exc}")
    return import_batch(data)
