"""Pytest configuration and fixtures."""

import json
import pytest
import tempfile
from pathlib import Path
from typing import Any, Dict


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def rules() -> Dict[str, Any]:
    """Root structure description with no members."""
    return {
        "type": "structure",
        "serialized_name": "xml",
        "members": {},
    }


@pytest.fixture
def people_schema() -> Dict[str, Any]:
    """Schema exercising every shape type."""
    return {
        "type": "structure",
        "members": {
            "name": {"type": "string", "serialized_name": "FullName"},
            "age": {"type": "integer"},
            "score": {"type": "float"},
            "active": {"type": "boolean"},
            "joined": {
                "type": "timestamp",
                "metadata": {"timestamp_format": "unixtimestamp"},
            },
            "avatar": {"type": "blob"},
            "tags": {"type": "list", "members": {"type": "string"}},
            "attrs": {
                "type": "map",
                "keys": {"type": "string"},
                "members": {"type": "string"},
            },
        },
    }


@pytest.fixture
def schema_file(temp_dir, people_schema) -> Path:
    """People schema written to a JSON file."""
    path = temp_dir / "schema.json"
    path.write_text(json.dumps(people_schema), encoding="utf-8")
    return path
