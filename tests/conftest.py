import copy
import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC = REPO_ROOT / "src"

# Prefer repo sources over any installed package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


SAMPLE_PROPERTIES = [
    {"id": "1", "address": "105 Mohawk St", "city": "Bruin", "county": "Butler", "type": "SFH", "stage": "Ready to Blast", "asking": 29900, "beds": 2, "baths": 2, "notes": "No heat", "dateAdded": "2026-01-21T06:34:05.343Z"},
    {"id": "2", "address": "177-179 Pine St", "city": "Johnstown", "county": "Cambria", "type": "MFH", "stage": "Ready to Blast", "asking": 24900, "beds": None, "baths": None, "notes": "Newer sewer line", "dateAdded": "2026-01-22T06:34:05.343Z"},
    {"id": "3", "address": "1317 W. 3rd St", "city": "Chester", "county": "Delaware", "type": "SFH", "stage": "New", "asking": 99900, "beds": 4, "baths": 1, "notes": "", "dateAdded": "2026-01-23T06:34:05.343Z"},
    {"id": "4", "address": "708 Jeffrey St", "city": "Chester", "county": "Delaware", "type": "SFH", "stage": "Too High", "asking": 99900, "beds": 3, "baths": 1, "notes": "", "dateAdded": "2026-01-24T06:34:05.343Z"},
    {"id": "5", "address": "173 Beechwood Ave", "city": "Clifton Heights", "county": "Delaware", "type": "Lot", "stage": "On Hold", "asking": 29900, "beds": None, "baths": None, "notes": "Buildable lot", "dateAdded": "2026-01-25T06:34:05.343Z"},
    {"id": "6", "address": "800 3rd Ave", "city": "Hyde Park", "county": "Westmoreland", "type": "SFH", "stage": "Sold", "asking": 59900, "beds": 3, "baths": 1, "notes": "Electric heat", "dateAdded": "2026-01-26T06:34:05.343Z"},
]

MOHAWK_RECORD = {
    "id": "1",
    "address": "105 Mohawk St",
    "city": "Bruin",
    "zip": "16022",
    "county": "Butler",
    "type": "SFH",
    "beds": 2,
    "baths": 2,
    "sqft": None,
    "asking": 29900,
    "arv": "",
    "rehab": "",
    "stage": "Ready to Blast",
    "access": "3333 front door",
    "pictures": "https://dropbox.com/photos",
    "contractLink": None,
    "investorSheetLink": None,
    "notes": "No heat, No electric",
    "lat": 41.0531,
    "lng": -79.7297,
    "geoPrecision": "exact",
    "dateAdded": "2026-01-21T06:34:05.343Z",
    "lastUpdated": "2026-01-21T06:34:05.343Z",
}


@pytest.fixture
def sample_properties():
    return copy.deepcopy(SAMPLE_PROPERTIES)


@pytest.fixture
def mohawk_record():
    return dict(MOHAWK_RECORD)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    from deal_pipeline.config import reset_settings_cache

    for name in (
        "DEALPIPE_STATE_TOKEN",
        "DEALPIPE_NEUTRALIZE_CSV",
        "DEALPIPE_LOG_LEVEL",
        "DEALPIPE_DEBOUNCE_MS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
