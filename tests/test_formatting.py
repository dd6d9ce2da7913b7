from datetime import datetime, timedelta, timezone

import pytest

from deal_pipeline.formatting import (
    STATUS_MAP,
    days_since_added,
    format_currency,
    format_date,
    format_number,
    parse_timestamp,
    utc_now_iso,
)
from deal_pipeline.models import STAGES
from deal_pipeline.normalize import normalize_properties


NOW = datetime(2026, 2, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, ""])
def test_days_since_added_unknown(value):
    assert days_since_added(value, now=NOW) is None


def test_days_since_added_past_and_future():
    assert days_since_added((NOW - timedelta(days=10)).isoformat(), now=NOW) == 10
    assert days_since_added((NOW + timedelta(days=5, hours=1)).isoformat(), now=NOW) == 5
    assert days_since_added(NOW.isoformat(), now=NOW) == 0
    assert days_since_added("2026-01-21T06:34:05.343Z", now=NOW) == 11


def test_days_since_added_defaults_to_current_time():
    assert days_since_added(utc_now_iso()) == 0


def test_parse_timestamp():
    parsed = parse_timestamp("2026-01-21T06:34:05.343Z")
    assert parsed == datetime(2026, 1, 21, 6, 34, 5, 343000, tzinfo=timezone.utc)
    assert parse_timestamp("2026-01-21").tzinfo is timezone.utc
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(12345) is None


def test_format_date():
    assert format_date("2026-01-21T06:34:05.343Z") == "Jan 21, 2026"
    assert format_date("2025-12-25T00:00:00.000Z") == "Dec 25, 2025"
    assert format_date(None) == "-"
    assert format_date("") == "-"
    assert format_date("garbage") == "-"


@pytest.mark.parametrize(
    "amount, text",
    [(99900, "$99,900"), (1000000, "$1,000,000"), (100, "$100"), (0, "-"), (None, "-"), ("", "-")],
)
def test_format_currency(amount, text):
    assert format_currency(amount) == text


def test_format_number():
    assert format_number(2.0) == "2"
    assert format_number(2.5) == "2.5"
    assert format_number(29900) == "29900"


def test_status_map_covers_every_stage():
    assert set(STATUS_MAP) == set(STAGES)
    assert STATUS_MAP["Ready to Blast"] == {"class": "ready", "label": "Ready", "color": "#22c55e"}


def test_utc_now_iso_shape():
    stamp = utc_now_iso()
    assert stamp.endswith("Z")
    assert len(stamp) == len("2026-01-21T06:34:05.343Z")


def test_normalize_blanks_falsy_money_and_notes():
    records = [
        {"arv": None, "rehab": 0, "notes": None, "asking": 0},
        {"arv": 100000, "rehab": 5000, "notes": "test"},
    ]
    out = normalize_properties(records)
    assert out is records
    assert records[0] == {"arv": "", "rehab": "", "notes": "", "asking": 0}
    assert records[1] == {"arv": 100000, "rehab": 5000, "notes": "test"}
    assert normalize_properties([]) == []
