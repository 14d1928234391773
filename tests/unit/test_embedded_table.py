"""Checks on the vendored db.json and the process-wide registry."""

import json
import re

import pytest

import mediatype_registry
from mediatype_registry import (
    MalformedTableError,
    MediaTypeRecord,
    MediaTypeRegistry,
    default_registry,
)
from mediatype_registry.data import DB_PATH, LICENSE_HEADER
from mediatype_registry.models import EXTENSION_PATTERN

KEY_RE = re.compile(r"^[a-z0-9][a-z0-9!#$&^_.+-]*/[a-z0-9][a-z0-9!#$&^_.+-]*$")

JSON_RECORD = MediaTypeRecord(
    source="iana", charset="UTF-8", compressible=True, extensions=["json", "map"]
)


@pytest.mark.unit
def test_every_key_is_a_two_part_media_type():
    for key, _ in mediatype_registry.entries():
        assert KEY_RE.match(key), key
        media_type, subtype = key.split("/")
        assert media_type and subtype


@pytest.mark.unit
def test_every_extension_is_a_lowercase_token():
    for key, record in mediatype_registry.entries():
        if record.extensions is None:
            continue
        assert record.extensions, key
        for ext in record.extensions:
            assert EXTENSION_PATTERN.match(ext), (key, ext)
            assert not ext.startswith("."), key
            assert "/" not in ext and "\\" not in ext, key


@pytest.mark.unit
def test_application_json_lookup():
    first = mediatype_registry.get("application/json")
    assert first == JSON_RECORD
    for _ in range(3):
        assert mediatype_registry.get("application/json") is first


@pytest.mark.unit
def test_miss_is_not_an_error():
    assert mediatype_registry.get("application/does-not-exist") is None


@pytest.mark.unit
def test_enumeration_matches_literal_keys():
    pairs = json.loads(DB_PATH.read_text(encoding="utf-8"), object_pairs_hook=list)
    keys = [key for key, _ in pairs]
    assert len(keys) == len(set(keys))
    assert [key for key, _ in mediatype_registry.entries()] == keys


@pytest.mark.unit
def test_embedded_table_is_complete():
    registry = default_registry()
    assert len(registry) == 2055
    assert registry.entries()[0] == (
        "application/1d-interleaved-parityfec",
        MediaTypeRecord(source="iana"),
    )
    assert registry.entries()[-1] == (
        "x-shader/x-vertex",
        MediaTypeRecord(compressible=True),
    )
    assert registry.get("font/woff2") == MediaTypeRecord(
        source="iana", extensions=["woff2"]
    )
    assert registry.get("application/wasm") == MediaTypeRecord(
        compressible=True, extensions=["wasm"]
    )
    assert registry.get("application/vnd.ms-excel").extensions == (
        "xls",
        "xlm",
        "xla",
        "xlc",
        "xlt",
        "xlw",
    )
    assert len(registry.compressible_types()) == 554


@pytest.mark.unit
def test_embedded_round_trip():
    registry = default_registry()
    assert MediaTypeRegistry.from_json(registry.dumps()) == registry


@pytest.mark.unit
def test_dump_reproduces_embedded_file():
    text = DB_PATH.read_text(encoding="utf-8")
    assert default_registry().dumps() + "\n" == text
    assert len(text.splitlines()) == len(default_registry()) + 2


@pytest.mark.unit
def test_upstream_ambiguities_preserved():
    registry = default_registry()
    assert registry.get("audio/wav").extensions == ("wav",)
    assert registry.get("audio/wave").extensions == ("wav",)
    assert registry.get("audio/x-wav").extensions == ("wav",)
    assert registry.get("application/bdoc").extensions == ("bdoc",)
    assert registry.get("application/x-bdoc").extensions == ("bdoc",)
    assert "xml" in registry.get("application/xml").extensions
    assert "xml" in registry.get("text/xml").extensions


@pytest.mark.unit
def test_well_known_records():
    registry = default_registry()
    assert registry.get("text/css").charset == "UTF-8"
    assert registry.get("application/ld+json").extensions == ("jsonld",)
    assert registry.get("image/png").compressible is False
    assert registry.get("application/x-chrome-extension").source is None
    assert registry.get("text/mathml").source == "nginx"
    assert "application/json" in registry.compressible_types()


@pytest.mark.unit
def test_default_registry_is_cached():
    assert default_registry() is default_registry()


@pytest.mark.unit
def test_license_header_shipped():
    assert "The MIT License" in LICENSE_HEADER
    assert "jshttp/mime-db" in LICENSE_HEADER


@pytest.mark.unit
def test_table_path_override(monkeypatch, table_file, sample_table):
    monkeypatch.setenv("MEDIATYPE_REGISTRY_TABLE_PATH", str(table_file))
    registry = default_registry()
    assert len(registry) == len(sample_table)
    assert mediatype_registry.get("message/partial").charset == "7-BIT"
    assert mediatype_registry.get("text/css") is None


@pytest.mark.unit
def test_missing_table_path_is_a_malformed_table(monkeypatch, tmp_path):
    missing = tmp_path / "nope.json"
    monkeypatch.setenv("MEDIATYPE_REGISTRY_TABLE_PATH", str(missing))
    with pytest.raises(MalformedTableError) as exc_info:
        mediatype_registry.get("text/css")
    assert exc_info.value.details["source"] == str(missing)
    assert exc_info.value.details["error_type"] == "FileNotFoundError"


@pytest.mark.unit
def test_directory_table_path_is_a_malformed_table(monkeypatch, tmp_path):
    monkeypatch.setenv("MEDIATYPE_REGISTRY_TABLE_PATH", str(tmp_path))
    with pytest.raises(MalformedTableError):
        mediatype_registry.entries()


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,value",
    [
        ("MEDIATYPE_REGISTRY_HTTP_TIMEOUT", "0"),
        ("MEDIATYPE_REGISTRY_HTTP_MAX_ATTEMPTS", "99"),
        ("MEDIATYPE_REGISTRY_LOG_LEVEL", "verbose"),
    ],
)
def test_unrelated_bad_settings_do_not_affect_lookups(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    assert mediatype_registry.get("application/json") == JSON_RECORD
    assert len(mediatype_registry.entries()) == 2055


@pytest.mark.unit
def test_malformed_table_fails_before_lookup(monkeypatch, tmp_path):
    bad = tmp_path / "db.json"
    bad.write_text('{"text/css": {"extensions": ["CSS"]}}', encoding="utf-8")
    monkeypatch.setenv("MEDIATYPE_REGISTRY_TABLE_PATH", str(bad))
    with pytest.raises(MalformedTableError) as exc_info:
        mediatype_registry.entries()
    assert exc_info.value.key == "text/css"
