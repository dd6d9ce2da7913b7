from typing import Any, List, MutableMapping


_BLANK_WHEN_FALSY = ("arv", "rehab", "notes")


def normalize_properties(records: List[MutableMapping[str, Any]]) -> List[MutableMapping[str, Any]]:
    """Rewrite falsy ``arv``/``rehab``/``notes`` to ``""`` in place.

    This is the shape older stored collections use, so freshly loaded and
    imported records render the same way. Other fields are left alone.
    """
    for record in records:
        for key in _BLANK_WHEN_FALSY:
            if not record.get(key):
                record[key] = ""
    return records
