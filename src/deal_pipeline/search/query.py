from __future__ import annotations

import math
from typing import Any, List, Mapping, Sequence, Tuple, Union

from deal_pipeline.formatting import parse_timestamp
from deal_pipeline.models import QueryOptions, get_field

from .filters import SEARCH_FIELDS, SORT_DIRECTIONS, SORT_FIELDS, stage_matches


Options = Union[QueryOptions, Mapping[str, Any], None]


def _coerce_options(options: Options) -> QueryOptions:
    if isinstance(options, QueryOptions):
        return options
    return QueryOptions.from_mapping(options)


def _is_missing(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, float) and math.isnan(value)


def _generic_key(value: Any) -> Tuple[int, Any]:
    # Rank by kind first so mixed columns never compare str with int.
    if isinstance(value, bool):
        return (2, str(value).lower())
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, str):
        return (1, value.lower())
    return (2, str(value).lower())


def _sort_key(value: Any, field_type: str) -> Tuple[int, Any]:
    """Sort key for one present value of a column of the given field type.

    Numeric columns compare numbers parsed from text too (``"3"`` is 3) and
    date columns compare instants, so offsets other than ``Z`` still order
    correctly. Values that do not parse fall back to kind-ranked ordering.
    """
    if field_type == "float" and not isinstance(value, bool):
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            number = None
        if number is not None and not math.isnan(number):
            return (0, number)
    elif field_type == "date":
        parsed = parse_timestamp(value)
        if parsed is not None:
            return (0, parsed.timestamp())
    return _generic_key(value)


def _text(value: Any) -> str:
    return value.lower() if isinstance(value, str) else ""


def _matches(record: Any, opts: QueryOptions, needle: str) -> bool:
    if not stage_matches(get_field(record, "stage"), opts.current_filter):
        return False
    if opts.county_filter and get_field(record, "county") != opts.county_filter:
        return False
    if opts.type_filter and get_field(record, "type") != opts.type_filter:
        return False
    if needle:
        return any(needle in _text(get_field(record, key)) for key in SEARCH_FIELDS)
    return True


def sort_records(records: Sequence[Any], sort_field: str, sort_direction: str) -> List[Any]:
    """Stable sort with empty values last in either direction."""
    if sort_field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {sort_field}")
    if sort_direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction: {sort_direction}")

    present: List[Any] = []
    missing: List[Any] = []
    for record in records:
        if _is_missing(get_field(record, sort_field)):
            missing.append(record)
        else:
            present.append(record)

    field_type = SORT_FIELDS[sort_field].type
    present.sort(
        key=lambda r: _sort_key(get_field(r, sort_field), field_type),
        reverse=sort_direction == "desc",
    )
    return present + missing


def get_filtered(collection: Sequence[Any], options: Options = None) -> List[Any]:
    """Filter and sort a collection without touching it.

    Returns a new list holding the same record objects. ``options`` is a
    :class:`QueryOptions` or the camelCase option mapping
    (``{"currentFilter": "ready", "sortField": "asking", ...}``); omitted
    options take the defaults (all stages, newest first).
    """
    opts = _coerce_options(options)
    needle = (opts.search_term or "").lower()
    filtered = [r for r in collection if _matches(r, opts, needle)]
    return sort_records(filtered, opts.sort_field, opts.sort_direction)
