"""Package initializer for `deal_pipeline`."""

from .duplicates import find_duplicate
from .exporters import export_csv, export_json
from .imports import import_batch, import_json
from .models import ImportResult, ParsedDeal, Property, QueryOptions
from .parsing import parse_block, parse_deal_text
from .search import get_filtered
from .stats import compute_spread, compute_stats
from .validation import validate_property

__all__ = [
    "ImportResult",
    "ParsedDeal",
    "Property",
    "QueryOptions",
    "compute_spread",
    "compute_stats",
    "export_csv",
    "export_json",
    "find_duplicate",
    "get_filtered",
    "import_batch",
    "import_json",
    "parse_block",
    "parse_deal_text",
    "validate_property",
]
