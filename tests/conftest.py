"""Shared fixtures and helpers for tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from gql_engine.config import EngineSettings
from gql_engine.core.schema import ObjectNode, build_schema

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------

SCHEMA_DESCRIPTION: dict[str, Any] = {
    "foo": "Int",
    "greeting": "String!",
    "user": {
        "__typename": "User",
        "name": "String",
        "age": "Int",
        "address": {"city": "String", "zip": "String"},
    },
}


@pytest.fixture
def schema() -> ObjectNode:
    """Return the sample schema used across resolution tests."""
    return build_schema(SCHEMA_DESCRIPTION)


@pytest.fixture
def handlers() -> dict[str, Any]:
    """Return handlers matching the sample schema."""
    return {
        "foo": lambda: 42,
        "greeting": "hello",
        "user": {
            "name": "Ada",
            "age": lambda: 36,
            "address": {"city": "London", "zip": "NW1"},
        },
    }


@pytest.fixture
def sequential_settings() -> EngineSettings:
    return EngineSettings(concurrent_fields=False)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """Write the sample schema to a JSON file."""
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(SCHEMA_DESCRIPTION), encoding="utf-8")
    return path
