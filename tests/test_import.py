import json
import logging

import pytest

from deal_pipeline.imports import MISSING_REQUIRED, NOT_AN_ARRAY, import_batch, import_json


def test_accepts_valid_batch():
    data = [
        {"id": "1", "address": "123 Main St", "city": "Chester"},
        {"id": "2", "address": "456 Oak Ave", "city": "Bruin"},
    ]
    result = import_batch(data)
    assert result.valid is True
    assert len(result.properties) == 2
    assert result.duplicates_removed == 0


@pytest.mark.parametrize("data", [{"address": "123 Main", "city": "Chester"}, "not an array", None, 42, True])
def test_rejects_non_list(data):
    result = import_batch(data)
    assert result.valid is False
    assert result.error == NOT_AN_ARRAY
    assert result.to_dict() == {"valid": False, "error": NOT_AN_ARRAY}


@pytest.mark.parametrize(
    "record",
    [
        {"id": "1", "city": "Chester"},
        {"id": "1", "address": "123 Main St"},
        {"id": "2", "address": "", "city": "Bruin"},
        "123 Main St",
    ],
)
def test_one_bad_record_rejects_whole_batch(record):
    data = [{"id": "9", "address": "1 Good St", "city": "Chester"}, record]
    result = import_batch(data)
    assert result.valid is False
    assert result.error == MISSING_REQUIRED


def test_duplicate_ids_keep_first_occurrence():
    data = [
        {"id": "1", "address": "123 Main St", "city": "Chester"},
        {"id": "1", "address": "456 Oak Ave", "city": "Bruin"},
        {"id": "2", "address": "789 Elm St", "city": "Darby"},
    ]
    result = import_batch(data)
    assert result.valid is True
    assert [p["address"] for p in result.properties] == ["123 Main St", "789 Elm St"]
    assert result.duplicates_removed == 1


def test_many_duplicates():
    data = [{"id": "same", "address": f"{i} Main St", "city": "Chester"} for i in range(50)]
    result = import_batch(data)
    assert len(result.properties) == 1
    assert result.duplicates_removed == 49


def test_null_ids_collide_with_each_other():
    data = [
        {"id": None, "address": "1 A St", "city": "Chester"},
        {"id": None, "address": "2 B St", "city": "Chester"},
    ]
    result = import_batch(data)
    assert len(result.properties) == 1
    assert result.duplicates_removed == 1


def test_missing_id_and_null_id_are_distinct():
    data = [
        {"address": "1 A St", "city": "Chester"},
        {"id": None, "address": "2 B St", "city": "Chester"},
        {"address": "3 C St", "city": "Chester"},
    ]
    result = import_batch(data)
    assert [p["address"] for p in result.properties] == ["1 A St", "2 B St"]
    assert len(result.properties) + result.duplicates_removed == 3


def test_numeric_and_string_ids_differ():
    data = [
        {"id": 1, "address": "1 A St", "city": "Chester"},
        {"id": "1", "address": "2 B St", "city": "Chester"},
    ]
    assert import_batch(data).duplicates_removed == 0


def test_extra_fields_and_objects_pass_through():
    record = {"id": "1", "address": "1 A St", "city": "Chester", "extraField": "value"}
    result = import_batch([record])
    assert result.properties[0] is record
    assert result.properties[0]["extraField"] == "value"


def test_whitespace_address_is_truthy_enough():
    result = import_batch([{"id": "1", "address": "   ", "city": "Chester"}])
    assert result.valid is True


def test_empty_batch_and_large_batch():
    assert import_batch([]).properties == []
    big = [{"id": str(i), "address": f"{i} Main St", "city": "Chester"} for i in range(1000)]
    result = import_batch(big)
    assert len(result.properties) == 1000
    assert result.duplicates_removed == 0


def test_import_is_idempotent():
    data = [
        {"id": "1", "address": "1 A St", "city": "Chester"},
        {"id": "1", "address": "2 B St", "city": "Chester"},
    ]
    first = import_batch(data)
    second = import_batch(first.properties)
    assert second.properties == first.properties
    assert second.duplicates_removed == 0


def test_to_dict_shape():
    result = import_batch([{"id": "1", "address": "1 A St", "city": "Chester"}])
    assert result.to_dict() == {
        "valid": True,
        "properties": [{"id": "1", "address": "1 A St", "city": "Chester"}],
        "duplicatesRemoved": 0,
    }


def test_duplicates_are_logged(caplog):
    data = [
        {"id": "7", "address": "1 A St", "city": "Chester"},
        {"id": "7", "address": "2 B St", "city": "Chester"},
    ]
    with caplog.at_level(logging.WARNING, logger="dealpipe.import"):
        import_batch(data)
    assert any("duplicate id removed: 7" in r.getMessage() for r in caplog.records)


def test_import_json_round_trip():
    text = json.dumps([{"id": "1", "address": "1 A St", "city": "Chester"}])
    result = import_json(text)
    assert result.valid is True
    assert result.properties[0]["city"] == "Chester"


def test_import_json_rejects_bad_text():
    result = import_json("{not json")
    assert result.valid is False
    assert result.error.startswith("Invalid JSON")
    assert import_json('{"address": "x"}').error == NOT_AN_ARRAY
