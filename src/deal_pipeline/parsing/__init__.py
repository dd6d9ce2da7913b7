"""Free-text deal parsing."""

from .block import RULES, parse_block, parse_deal_text, split_blocks  # noqa: F401
from .fields import (  # noqa: F401
    parse_address_line,
    parse_baths,
    parse_beds,
    parse_county,
    parse_price_k,
    parse_url,
)
