from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from deal_pipeline.models import STAGE_BUCKETS, STAGES


FieldType = Literal["str", "float", "date"]


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    type: FieldType


# Sortable columns of the deal list (keys are record keys).
SORT_FIELDS: Dict[str, FieldDefinition] = {
    "address": FieldDefinition(name="address", type="str"),
    "city": FieldDefinition(name="city", type="str"),
    "county": FieldDefinition(name="county", type="str"),
    "type": FieldDefinition(name="type", type="str"),
    "beds": FieldDefinition(name="beds", type="float"),
    "baths": FieldDefinition(name="baths", type="float"),
    "asking": FieldDefinition(name="asking", type="float"),
    "arv": FieldDefinition(name="arv", type="float"),
    "stage": FieldDefinition(name="stage", type="str"),
    "dateAdded": FieldDefinition(name="dateAdded", type="date"),
}

SORT_DIRECTIONS = ("asc", "desc")

SEARCH_FIELDS = ("address", "city", "county", "notes")


def stage_matches(stage: Optional[str], current_filter: Optional[str]) -> bool:
    """Whether a record's stage passes the current filter bucket.

    ``"all"`` passes everything. Bucket keys (``"ready"``) and full stage
    names (``"Ready to Blast"``) select that stage; any other bucket selects
    nothing.
    """
    if not current_filter or current_filter == "all":
        return True
    wanted = STAGE_BUCKETS.get(current_filter)
    if wanted is None and current_filter in STAGES:
        wanted = current_filter
    return wanted is not None and stage == wanted
