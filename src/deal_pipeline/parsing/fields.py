"""Single-line extractors used by the deal block parser.

Every function takes one already-trimmed line and returns ``None`` when the
line does not carry the field. None of them raise.
"""
from __future__ import annotations

import math
import re
from typing import Optional, Tuple


_K_NUMBER_RE = re.compile(r"(\d+(?:\.\d*)?)\s*k", re.IGNORECASE)
_BARE_K_PRICE_RE = re.compile(r"\$?\d+(?:\.\d*)?k", re.IGNORECASE)
_BEDS_RE = re.compile(r"(\d+)\s*(?:br|bed)", re.IGNORECASE)
_BATHS_RE = re.compile(r"(\d+(?:\.\d*)?)\s*(?:ba|bath)", re.IGNORECASE)
_URL_RE = re.compile(r"(https?://\S+)")
_COUNTY_RE = re.compile(r"county", re.IGNORECASE)
_ACCESS_PREFIX_RE = re.compile(r"^access:?", re.IGNORECASE)
_LOOSE_ADDRESS_RE = re.compile(r"^(\d+[^,]+),\s*([A-Za-z\s]+)$")

ACCESS_KEYWORDS = ("access", "lockbox", "door", "code")
ARV_KEYWORDS = ("arv", "worth")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _strict_address_re(state_token: str) -> "re.Pattern[str]":
    return re.compile(
        rf"^(\d+[^,]+),\s*([^,]+),\s*{re.escape(state_token)}\s*(\d{{5}})?",
        re.IGNORECASE,
    )


def parse_price_k(line: Optional[str]) -> Optional[int]:
    """``"Asking 29.9k"`` -> ``29900``; whole dollars."""
    if not line:
        return None
    m = _K_NUMBER_RE.search(line)
    if not m:
        return None
    try:
        amount = float(m.group(1)) * 1000
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return _round_half_up(amount)


def has_bare_k_price(line: Optional[str]) -> bool:
    return bool(line) and _BARE_K_PRICE_RE.search(line) is not None


def parse_beds(line: Optional[str]) -> Optional[int]:
    if not line:
        return None
    m = _BEDS_RE.search(line)
    if not m:
        return None
    try:
        return int(m.group(1))
    except ValueError:
        # Longer than the int-from-string digit limit.
        return None


def parse_baths(line: Optional[str]) -> Optional[float]:
    if not line:
        return None
    m = _BATHS_RE.search(line)
    if not m:
        return None
    try:
        baths = float(m.group(1))
    except ValueError:
        return None
    return baths if math.isfinite(baths) else None


def parse_url(line: Optional[str]) -> Optional[str]:
    if not line:
        return None
    m = _URL_RE.search(line)
    return m.group(1) if m else None


def parse_county(line: Optional[str]) -> Optional[str]:
    """``"Butler County"`` -> ``"Butler"``."""
    if not line or "county" not in line.lower():
        return None
    return _COUNTY_RE.sub("", line, count=1).strip()


def parse_access(line: Optional[str]) -> Optional[str]:
    if not line:
        return None
    return _ACCESS_PREFIX_RE.sub("", line, count=1).strip()


def parse_address_line(
    line: Optional[str], state_token: str = "PA"
) -> Optional[Tuple[str, str, str]]:
    """Return ``(address, city, zip)`` for a street line, else ``None``.

    Tries ``<number street>, <city>, <STATE> [zip]`` first, then the looser
    ``<number street>, <city>`` form. The loose form never accepts a line that
    mentions a county.
    """
    if not line:
        return None
    m = _strict_address_re(state_token).match(line)
    if m:
        return m.group(1).strip(), m.group(2).strip(), m.group(3) or ""
    if "county" in line.lower():
        return None
    m = _LOOSE_ADDRESS_RE.match(line)
    if m:
        return m.group(1).strip(), m.group(2).strip(), ""
    return None
