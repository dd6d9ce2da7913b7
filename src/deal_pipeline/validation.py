from __future__ import annotations

import math
import re
from typing import Any, List, Mapping, Tuple

from pydantic import AnyUrl, BaseModel, TypeAdapter, ValidationError

from deal_pipeline.models import get_field


_URL_ADAPTER = TypeAdapter(AnyUrl)
_ZIP_RE = re.compile(r"[0-9]{5}(?:-[0-9]{4})?")

MAX_ROOMS = 50
MAX_SQFT = 1_000_000
MAX_PRICE = 100_000_000

# (field, low, high, message); checked in this order.
RANGE_RULES: Tuple[Tuple[str, int, int, str], ...] = (
    ("beds", 0, MAX_ROOMS, "Beds must be between 0 and 50"),
    ("baths", 0, MAX_ROOMS, "Baths must be between 0 and 50"),
    ("sqft", 0, MAX_SQFT, "Square footage must be between 0 and 1,000,000"),
    ("asking", 0, MAX_PRICE, "Asking price must be between $0 and $100,000,000"),
    ("arv", 0, MAX_PRICE, "ARV must be between $0 and $100,000,000"),
    ("rehab", 0, MAX_PRICE, "Rehab cost must be between $0 and $100,000,000"),
)

URL_RULES: Tuple[Tuple[str, str], ...] = (
    ("pictures", "Pictures link must be a valid URL"),
    ("contractLink", "Contract link must be a valid URL"),
    ("investorSheetLink", "Investor sheet link must be a valid URL"),
)


def is_valid_url(value: Any) -> bool:
    """True for an absolute URL with a scheme (``https://...``, ``mailto:...``)."""
    if value is None:
        return False
    try:
        _URL_ADAPTER.validate_python(str(value).strip())
    except ValidationError:
        return False
    return True


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _out_of_range(value: Any, low: int, high: int) -> bool:
    if value is None or value == "":
        return False
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return True
    if math.isnan(number):
        return True
    return number < low or number > high


def validate_property(candidate: Any) -> List[str]:
    """Return every field-level violation for ``candidate``.

    An empty list means the record may be stored. Checks never stop early
    and never raise, so a UI can show the first message or all of them.
    """
    if not isinstance(candidate, (Mapping, BaseModel)):
        return ["Expected a property record"]

    errors: List[str] = []

    if _is_blank(get_field(candidate, "address")):
        errors.append("Address is required")
    if _is_blank(get_field(candidate, "city")):
        errors.append("City is required")

    for key, low, high, message in RANGE_RULES:
        if _out_of_range(get_field(candidate, key), low, high):
            errors.append(message)

    for key, message in URL_RULES:
        value = get_field(candidate, key)
        if value and not is_valid_url(value):
            errors.append(message)

    zip_code = get_field(candidate, "zip")
    if zip_code and not _ZIP_RE.fullmatch(str(zip_code)):
        errors.append("ZIP code must be 5 digits (optional 4-digit extension)")

    return errors
