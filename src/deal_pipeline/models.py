from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


Stage = Literal["New", "Ready to Blast", "On Hold", "Too High", "Sold"]
PropertyType = Literal["SFH", "MFH", "Lot", "Unknown"]
GeoPrecision = Literal["exact", "approx", "none"]
SortDirection = Literal["asc", "desc"]

STAGES = ("New", "Ready to Blast", "On Hold", "Too High", "Sold")
PROPERTY_TYPES = ("SFH", "MFH", "Lot", "Unknown")
GEO_PRECISIONS = ("exact", "approx", "none")

# Filter bucket key -> stage value.
STAGE_BUCKETS: Dict[str, str] = {
    "ready": "Ready to Blast",
    "new": "New",
    "hold": "On Hold",
    "high": "Too High",
    "sold": "Sold",
}

# Python attribute name for every camelCase record key that differs.
ALIASES: Dict[str, str] = {
    "contractLink": "contract_link",
    "investorSheetLink": "investor_sheet_link",
    "geoPrecision": "geo_precision",
    "dateAdded": "date_added",
    "lastUpdated": "last_updated",
}


class Property(BaseModel):
    """Canonical deal record.

    All optional fields are nullable; null means "unknown", never zero.
    Keys serialize in camelCase (``model_dump(by_alias=True)``) and unknown
    keys from imported JSON are kept as extras.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    address: str = ""
    city: str = ""
    zip: Optional[str] = None
    county: Optional[str] = None
    type: PropertyType = "Unknown"

    beds: Optional[int] = None
    baths: Optional[float] = None
    sqft: Optional[int] = None

    asking: Optional[int] = None
    arv: Optional[int] = None
    rehab: Optional[int] = None

    stage: Stage = "New"
    access: Optional[str] = None
    pictures: Optional[str] = None
    contract_link: Optional[str] = Field(default=None, alias="contractLink")
    investor_sheet_link: Optional[str] = Field(default=None, alias="investorSheetLink")
    notes: Optional[str] = None

    lat: Optional[float] = None
    lng: Optional[float] = None
    geo_precision: GeoPrecision = Field(default="none", alias="geoPrecision")

    date_added: Optional[str] = Field(default=None, alias="dateAdded")
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")

    @field_validator("beds", "baths", "sqft", "asking", "arv", "rehab", "lat", "lng", mode="before")
    @classmethod
    def _blank_is_unknown(cls, value: Any) -> Any:
        # Older backups store missing money fields as "".
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def get_field(record: Any, key: str) -> Any:
    """Read a camelCase key from a mapping or a ``Property``."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(key)
    if isinstance(record, BaseModel):
        return getattr(record, ALIASES.get(key, key), None)
    return getattr(record, key, None)


def as_record(record: Any) -> Dict[str, Any]:
    if isinstance(record, Property):
        return record.to_record()
    if isinstance(record, BaseModel):
        return record.model_dump(by_alias=True)
    return dict(record)


@dataclass
class ParsedDeal:
    """Best-effort extraction from one pasted deal block."""

    address: str = ""
    city: str = ""
    zip: str = ""
    county: str = ""
    beds: Optional[int] = None
    baths: Optional[float] = None
    asking: Optional[int] = None
    arv: Optional[int] = None
    access: Optional[str] = None
    pictures: Optional[str] = None
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class QueryOptions:
    current_filter: str = "all"
    county_filter: Optional[str] = None
    type_filter: Optional[str] = None
    search_term: str = ""
    sort_field: str = "dateAdded"
    sort_direction: SortDirection = "desc"

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "QueryOptions":
        """Build from the camelCase options object used by callers."""
        if not options:
            return cls()
        return cls(
            current_filter=options.get("currentFilter") or "all",
            county_filter=options.get("countyFilter"),
            type_filter=options.get("typeFilter"),
            search_term=options.get("searchTerm") or "",
            sort_field=options.get("sortField") or "dateAdded",
            sort_direction=options.get("sortDirection") or "desc",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentFilter": self.current_filter,
            "countyFilter": self.county_filter,
            "typeFilter": self.type_filter,
            "searchTerm": self.search_term,
            "sortField": self.sort_field,
            "sortDirection": self.sort_direction,
        }


@dataclass
class ImportResult:
    valid: bool
    properties: Optional[List[Any]] = None
    duplicates_removed: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if not self.valid:
            return {"valid": False, "error": self.error}
        return {
            "valid": True,
            "properties": [as_record(p) for p in self.properties or []],
            "duplicatesRemoved": self.duplicates_removed,
        }
