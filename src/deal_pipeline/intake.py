from __future__ import annotations

import uuid
from typing import Any, Callable, Iterable, List, Optional, Sequence

from deal_pipeline.formatting import utc_now_iso
from deal_pipeline.models import STAGES, ParsedDeal, Property, get_field


def new_property_id() -> str:
    return str(uuid.uuid4())


def build_property(
    deal: ParsedDeal,
    now: Optional[str] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> Property:
    """Turn a parsed deal into a stored record.

    New records start in stage ``New`` with type ``Unknown`` and no
    coordinates; empty text fields become ``None``.
    """
    timestamp = now or utc_now_iso()
    return Property(
        id=(id_factory or new_property_id)(),
        address=deal.address,
        city=deal.city,
        zip=deal.zip or None,
        county=deal.county or None,
        type="Unknown",
        beds=deal.beds,
        baths=deal.baths,
        sqft=None,
        asking=deal.asking,
        arv=deal.arv,
        rehab=None,
        stage="New",
        access=deal.access or None,
        pictures=deal.pictures or None,
        contract_link=None,
        investor_sheet_link=None,
        notes=deal.notes or None,
        lat=None,
        lng=None,
        geo_precision="none",
        date_added=timestamp,
        last_updated=timestamp,
    )


def _id_set(ids: Iterable[Any]) -> set:
    return {str(i) for i in ids}


def set_stage(
    collection: Sequence[Any],
    ids: Iterable[Any],
    stage: str,
    now: Optional[str] = None,
) -> List[Any]:
    """Copy of ``collection`` with ``stage`` applied to the selected ids."""
    if stage not in STAGES:
        raise ValueError(f"Unknown stage: {stage}")
    selected = _id_set(ids)
    timestamp = now or utc_now_iso()
    out: List[Any] = []
    for record in collection:
        if str(get_field(record, "id")) not in selected:
            out.append(record)
        elif isinstance(record, Property):
            out.append(record.model_copy(update={"stage": stage, "last_updated": timestamp}))
        else:
            out.append({**record, "stage": stage, "lastUpdated": timestamp})
    return out


def remove_properties(collection: Sequence[Any], ids: Iterable[Any]) -> List[Any]:
    selected = _id_set(ids)
    return [r for r in collection if str(get_field(r, "id")) not in selected]
