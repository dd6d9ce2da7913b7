from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from deal_pipeline.models import STAGE_BUCKETS, get_field


def compute_stats(collection: Sequence[Any]) -> Dict[str, int]:
    """Per-bucket stage counts plus ``total``."""
    stats = {bucket: 0 for bucket in STAGE_BUCKETS}
    by_stage = {stage: bucket for bucket, stage in STAGE_BUCKETS.items()}
    for record in collection:
        bucket = by_stage.get(get_field(record, "stage"))
        if bucket:
            stats[bucket] += 1
    stats["total"] = len(collection)
    return stats


def _value_counts(collection: Sequence[Any], key: str) -> Dict[Any, int]:
    counts: Dict[Any, int] = {}
    for record in collection:
        value = get_field(record, key)
        if value:
            counts[value] = counts.get(value, 0) + 1
    return counts


def compute_county_counts(collection: Sequence[Any]) -> List[Tuple[str, int]]:
    """``[(county, n), ...]``, busiest first; ties keep discovery order."""
    counts = _value_counts(collection, "county")
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def compute_type_counts(collection: Sequence[Any]) -> List[Tuple[str, int]]:
    return list(_value_counts(collection, "type").items())


def compute_spread(arv: Any, asking: Any, rehab: Optional[Any] = None) -> Optional[Any]:
    """ARV minus asking minus rehab.

    A zero ARV or asking price counts as missing, same as ``None``; the
    result may be negative.
    """
    if not arv or not asking:
        return None
    return arv - asking - (rehab or 0)
