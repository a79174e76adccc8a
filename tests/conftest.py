from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

# Ensure the repository root is importable when running pytest from any CWD.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from eclipse_spaces.models import Space  # noqa: E402


def _single_export(name: str, schema_version: Any = 1) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "version": "1.0",
        "type": "eclipse-space-export",
        "data": {
            "name": name,
            "iconType": "text",
            "apps": [
                {"title": "A", "type": "app", "url": "https://a.example"},
                {
                    "title": "Folder",
                    "type": "folder",
                    "children": [{"title": "B", "type": "app", "url": "https://b.example"}],
                },
            ],
        },
    }
    if schema_version is not None:
        payload["schemaVersion"] = schema_version
    return payload


def _multi_export(names: List[str], schema_version: Any = 1) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "version": "1.0",
        "type": "eclipse-multi-space-export",
        "data": {"spaces": [_single_export(n)["data"] for n in names]},
    }
    if schema_version is not None:
        payload["schemaVersion"] = schema_version
    return payload


@pytest.fixture
def single_export() -> Callable[..., Dict[str, Any]]:
    """Single-space export with 1 app + 1 folder holding 1 app (3 items)."""
    return _single_export


@pytest.fixture
def multi_export() -> Callable[..., Dict[str, Any]]:
    return _multi_export


@pytest.fixture
def existing_spaces() -> List[Space]:
    return [Space(id="space-1", name="Main", icon_type="text", apps=[], created_at=1)]
