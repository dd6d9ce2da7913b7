from .filters import SORT_FIELDS, stage_matches  # noqa: F401
from .query import get_filtered, sort_records  # noqa: F401
