import json
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mediatype_registry.registry import default_registry  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the caller's registry configuration.

    Clears every MEDIATYPE_REGISTRY_* variable and resets the cached
    process-wide registry so each test loads it with its own settings.
    """
    for name in (
        "MEDIATYPE_REGISTRY_LOG_LEVEL",
        "MEDIATYPE_REGISTRY_TABLE_PATH",
        "MEDIATYPE_REGISTRY_UPSTREAM_URL",
        "MEDIATYPE_REGISTRY_HTTP_TIMEOUT",
        "MEDIATYPE_REGISTRY_HTTP_MAX_ATTEMPTS",
    ):
        monkeypatch.delenv(name, raising=False)
    default_registry.cache_clear()
    yield
    default_registry.cache_clear()


@pytest.fixture
def css_snippet():
    """Single-record table literal."""
    return (
        '{"text/css": {"source":"iana","charset":"UTF-8",'
        '"compressible":true,"extensions":["css"]}}'
    )


@pytest.fixture
def sample_table():
    """Small table covering every optional-field combination."""
    return {
        "application/json": {
            "source": "iana",
            "charset": "UTF-8",
            "compressible": True,
            "extensions": ["json", "map"],
        },
        "application/ld+json": {
            "source": "iana",
            "compressible": True,
            "extensions": ["jsonld"],
        },
        "application/x-unknown": {},
        "audio/wav": {"compressible": False, "extensions": ["wav"]},
        "audio/wave": {"compressible": False, "extensions": ["wav"]},
        "message/partial": {"source": "iana", "charset": "7-BIT", "compressible": False},
        "text/mathml": {"source": "nginx", "extensions": ["mml"]},
    }


@pytest.fixture
def table_file(tmp_path, sample_table):
    """Write ``sample_table`` to a temporary db.json and return its path."""
    path = tmp_path / "db.json"
    path.write_text(json.dumps(sample_table), encoding="utf-8")
    return path
