"""Unit tests for the media type record model."""

import pytest
from pydantic import ValidationError

from mediatype_registry.models import MediaTypeRecord, is_valid_media_type


@pytest.mark.unit
def test_all_fields_optional():
    record = MediaTypeRecord()
    assert record.source is None
    assert record.charset is None
    assert record.compressible is None
    assert record.extensions is None
    assert record.preferred_extension is None
    assert record.to_dict() == {}


@pytest.mark.unit
def test_full_record_to_dict_keeps_field_order():
    record = MediaTypeRecord.model_validate(
        {
            "source": "iana",
            "charset": "UTF-8",
            "compressible": True,
            "extensions": ["json", "map"],
        }
    )
    assert record.extensions == ("json", "map")
    assert record.preferred_extension == "json"
    dumped = record.to_dict()
    assert dumped == {
        "source": "iana",
        "charset": "UTF-8",
        "compressible": True,
        "extensions": ["json", "map"],
    }
    assert list(dumped) == ["source", "charset", "compressible", "extensions"]


@pytest.mark.unit
def test_compressible_false_is_not_absent():
    record = MediaTypeRecord(compressible=False)
    assert record.compressible is False
    assert record.to_dict() == {"compressible": False}
    assert MediaTypeRecord().to_dict() == {}


@pytest.mark.unit
def test_hyphenated_extension_token_accepted():
    record = MediaTypeRecord(extensions=["sfd-hdstx"])
    assert record.extensions == ("sfd-hdstx",)


@pytest.mark.unit
@pytest.mark.parametrize(
    "fields",
    [
        {"source": "w3c"},
        {"charset": 8},
        {"compressible": "yes"},
        {"compressible": 1},
        {"extensions": []},
        {"extensions": ["JSON"]},
        {"extensions": [".json"]},
        {"extensions": ["a/b"]},
        {"extensions": [""]},
        {"extensions": [7]},
        {"mime": "text/plain"},
    ],
)
def test_invalid_records_rejected(fields):
    with pytest.raises(ValidationError):
        MediaTypeRecord.model_validate(fields)


@pytest.mark.unit
def test_record_is_frozen():
    record = MediaTypeRecord(source="iana")
    with pytest.raises(ValidationError):
        record.source = "apache"


@pytest.mark.unit
def test_records_compare_by_value():
    a = MediaTypeRecord(source="nginx", extensions=["mml"])
    b = MediaTypeRecord.model_validate({"source": "nginx", "extensions": ["mml"]})
    assert a == b
    assert a != MediaTypeRecord(source="nginx")


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ("application/json", True),
        ("application/ld+json", True),
        ("application/vnd.ms-excel.sheet.macroenabled.12", True),
        ("Application/JSON", False),
        ("application", False),
        ("application/", False),
        ("/json", False),
        ("text/plain; charset=utf-8", False),
        (" text/plain", False),
        (None, False),
    ],
)
def test_is_valid_media_type(value, expected):
    assert is_valid_media_type(value) is expected
