from typing import Any, Optional, Sequence

from deal_pipeline.models import get_field


def find_duplicate(collection: Sequence[Any], address: Optional[str], city: Optional[str]) -> Optional[Any]:
    """Return the first record that looks like the same street address.

    The city must match exactly (ignoring case); the addresses only need to
    contain one another, so "105 Mohawk" finds "105 Mohawk St".
    """
    if not address or not city:
        return None
    addr = address.lower()
    city_lower = city.lower()
    for record in collection:
        existing = str(get_field(record, "address") or "").lower()
        existing_city = str(get_field(record, "city") or "").lower()
        if not existing or existing_city != city_lower:
            continue
        if addr in existing or existing in addr:
            return record
    return None
