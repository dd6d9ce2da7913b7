from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, Tuple

from deal_pipeline.config import get_settings
from deal_pipeline.formatting import days_since_added, format_number
from deal_pipeline.models import as_record, get_field
from deal_pipeline.security import neutralize_csv_field


logger = logging.getLogger("dealpipe.export")


def _quoted(value: Any) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def _raw(value: Any) -> str:
    return "" if value is None else format_number(value)


def _or_blank(value: Any) -> str:
    # Falsy values, zero included, export as an empty cell.
    return format_number(value) if value else ""


# (header, record key, cell renderer). "daysSinceAdded" is computed per row.
CSV_COLUMNS: Tuple[Tuple[str, str, Callable[[Any], str]], ...] = (
    ("Address", "address", _quoted),
    ("City", "city", _raw),
    ("ZIP", "zip", _or_blank),
    ("County", "county", _or_blank),
    ("Type", "type", _raw),
    ("Beds", "beds", _or_blank),
    ("Baths", "baths", _or_blank),
    ("Sq Ft", "sqft", _or_blank),
    ("Asking", "asking", _or_blank),
    ("ARV", "arv", _or_blank),
    ("Rehab", "rehab", _or_blank),
    ("Access", "access", _quoted),
    ("Stage", "stage", _raw),
    ("Notes", "notes", _quoted),
    ("Photos", "pictures", _or_blank),
    ("Contract Link", "contractLink", _or_blank),
    ("Investor Sheet", "investorSheetLink", _or_blank),
    ("Lat", "lat", _or_blank),
    ("Lng", "lng", _or_blank),
    ("Geo Precision", "geoPrecision", _or_blank),
    ("Date Added", "dateAdded", _or_blank),
    ("Days Since Added", "daysSinceAdded", _raw),
    ("Last Updated", "lastUpdated", _or_blank),
)

CSV_HEADER = [header for header, _, _ in CSV_COLUMNS]


def _cell(record: Any, key: str, render: Callable[[Any], str], now: Optional[datetime], neutralize: bool) -> str:
    if key == "daysSinceAdded":
        value: Any = days_since_added(get_field(record, "dateAdded"), now=now)
    else:
        value = get_field(record, key)
    if neutralize and isinstance(value, str):
        value = neutralize_csv_field(value)
    return render(value)


def export_csv(
    collection: Sequence[Any],
    now: Optional[datetime] = None,
    neutralize: Optional[bool] = None,
) -> str:
    """Serialize a collection to CSV text for spreadsheet tools.

    Address, access and notes are always quoted (inner quotes doubled); every
    other cell is written bare. Rows are joined with ``\\n`` and an empty
    collection gives the header line alone. ``neutralize`` prefixes text
    cells that start with ``=``, ``+``, ``-`` or ``@`` with a quote; it
    defaults to the ``DEALPIPE_NEUTRALIZE_CSV`` setting.
    """
    if neutralize is None:
        neutralize = get_settings().neutralize_csv
    lines: List[str] = [",".join(CSV_HEADER)]
    for record in collection:
        lines.append(
            ",".join(_cell(record, key, render, now, neutralize) for _, key, render in CSV_COLUMNS)
        )
    logger.debug("exported %s rows to csv", len(lines) - 1)
    return "\n".join(lines)


def export_json(collection: Sequence[Any]) -> str:
    """JSON backup of the collection, readable by ``import_json``."""
    return json.dumps([as_record(r) for r in collection], ensure_ascii=False, indent=2)
