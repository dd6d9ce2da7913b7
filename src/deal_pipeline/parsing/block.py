from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from deal_pipeline.config import get_settings
from deal_pipeline.models import ParsedDeal

from .fields import (
    ACCESS_KEYWORDS,
    ARV_KEYWORDS,
    has_bare_k_price,
    parse_access,
    parse_address_line,
    parse_baths,
    parse_beds,
    parse_county,
    parse_price_k,
    parse_url,
)


logger = logging.getLogger("dealpipe.parse")

_BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n|---+")


@dataclass
class _BlockState:
    deal: ParsedDeal
    state_token: str
    notes: List[str] = field(default_factory=list)


# A rule returns True when it consumed the line.
Rule = Callable[[str, str, _BlockState], bool]


def _address_rule(line: str, lower: str, state: _BlockState) -> bool:
    if state.deal.address:
        return False
    parsed = parse_address_line(line, state.state_token)
    if not parsed:
        return False
    state.deal.address, state.deal.city, state.deal.zip = parsed
    return True


def _county_rule(line: str, lower: str, state: _BlockState) -> bool:
    county = parse_county(line)
    if county is None:
        return False
    state.deal.county = county
    return True


def _beds_baths_rule(line: str, lower: str, state: _BlockState) -> bool:
    beds = parse_beds(line)
    baths = parse_baths(line)
    if beds is not None:
        state.deal.beds = beds
    if baths is not None:
        state.deal.baths = baths
    return beds is not None or baths is not None


def _arv_rule(line: str, lower: str, state: _BlockState) -> bool:
    # Runs before the asking rule so "ARV 275k" is never taken as a price.
    if not any(k in lower for k in ARV_KEYWORDS):
        return False
    amount = parse_price_k(line)
    if amount is None:
        return False
    state.deal.arv = amount
    return True


def _asking_rule(line: str, lower: str, state: _BlockState) -> bool:
    if "asking" not in lower and not has_bare_k_price(lower):
        return False
    amount = parse_price_k(line)
    if amount is None:
        return False
    state.deal.asking = amount
    return True


def _access_rule(line: str, lower: str, state: _BlockState) -> bool:
    if not any(k in lower for k in ACCESS_KEYWORDS):
        return False
    state.deal.access = parse_access(line)
    return True


def _pictures_rule(line: str, lower: str, state: _BlockState) -> bool:
    # A photo keyword alone is not enough; the line must carry a link.
    url = parse_url(line)
    if url is None:
        return False
    state.deal.pictures = url
    return True


def _notes_rule(line: str, lower: str, state: _BlockState) -> bool:
    if len(line) <= 3:
        return False
    state.notes.append(line)
    return True


RULES: Tuple[Tuple[str, Rule], ...] = (
    ("address", _address_rule),
    ("county", _county_rule),
    ("beds_baths", _beds_baths_rule),
    ("arv", _arv_rule),
    ("asking", _asking_rule),
    ("access", _access_rule),
    ("pictures", _pictures_rule),
    ("notes", _notes_rule),
)


def match_rule(line: str, state: _BlockState) -> Optional[str]:
    """Apply the first rule that consumes ``line`` and return its name."""
    lower = line.lower()
    for name, rule in RULES:
        if rule(line, lower, state):
            return name
    return None


def parse_block(text: Optional[str], state_token: Optional[str] = None) -> ParsedDeal:
    """Parse one pasted deal block into a :class:`ParsedDeal`.

    Never raises; a block with no recognizable street line comes back with
    an empty ``address`` and the caller decides what to do with it.
    """
    if state_token is None:
        state_token = get_settings().state_token
    state = _BlockState(deal=ParsedDeal(), state_token=state_token)
    for raw in (text or "").split("\n"):
        line = raw.strip()
        if not line:
            continue
        match_rule(line, state)
    state.deal.notes = "\n".join(state.notes)
    return state.deal


def split_blocks(text: Optional[str]) -> List[str]:
    """Split a paste on blank lines or ``---`` separators."""
    return [b for b in _BLOCK_SEPARATOR_RE.split(text or "") if b.strip()]


def parse_deal_text(text: Optional[str], state_token: Optional[str] = None) -> List[ParsedDeal]:
    blocks = split_blocks(text)
    deals: List[ParsedDeal] = []
    for index, block in enumerate(blocks):
        deal = parse_block(block, state_token=state_token)
        if not deal.address:
            logger.debug("dropping block %s: no street line", index)
            continue
        deals.append(deal)
    logger.debug("parsed %s of %s blocks", len(deals), len(blocks))
    return deals
