from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol

from eclipse_spaces.app_storage import save_json
from eclipse_spaces.constants import APP_NAME
from eclipse_spaces.errors import SpaceStoreError
from eclipse_spaces.models import Space

LOGGER = logging.getLogger(APP_NAME)

SPACES_STATE_VERSION = 1


class SpaceStore(Protocol):
    name: str

    def load_spaces(self) -> List[Space]:
        ...

    def save_spaces(self, spaces: List[Space]) -> None:
        ...

    def load_deleted_spaces(self) -> List[Space]:
        ...

    def replace_spaces(self, spaces: List[Space], deleted: List[Space]) -> None:
        ...


class JsonSpaceStore(SpaceStore):
    """Spaces state persisted as one JSON document on disk."""

    name = "json"

    def __init__(self, path: Path) -> None:
        self.path = path

    def _default_state(self) -> Dict[str, Any]:
        return {
            "version": SPACES_STATE_VERSION,
            "active_space_id": "",
            "spaces": [],
            "deleted_spaces": [],
        }

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return self._default_state()
        try:
            state = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SpaceStoreError(f"Failed to read spaces from {self.path}: {exc}") from exc
        if not isinstance(state, dict):
            raise SpaceStoreError(f"Invalid spaces state in {self.path}")
        return state

    def _write(self, state: Dict[str, Any]) -> None:
        if not save_json(self.path, state):
            raise SpaceStoreError(f"Failed to write spaces to {self.path}")

    @staticmethod
    def _spaces(state: Dict[str, Any], key: str) -> List[Space]:
        raw = state.get(key)
        if not isinstance(raw, list):
            return []
        return [Space.from_dict(s) for s in raw if isinstance(s, dict)]

    def load_spaces(self) -> List[Space]:
        return self._spaces(self._read(), "spaces")

    def load_deleted_spaces(self) -> List[Space]:
        return self._spaces(self._read(), "deleted_spaces")

    @staticmethod
    def _set_spaces(state: Dict[str, Any], spaces: List[Space]) -> None:
        state["version"] = SPACES_STATE_VERSION
        state["spaces"] = [s.to_dict() for s in spaces]
        ids = {s.id for s in spaces}
        if state.get("active_space_id") not in ids:
            state["active_space_id"] = spaces[0].id if spaces else ""

    def save_spaces(self, spaces: List[Space]) -> None:
        state = self._read()
        self._set_spaces(state, spaces)
        self._write(state)
        LOGGER.info("saved %d spaces to %s", len(spaces), self.path)

    def replace_spaces(self, spaces: List[Space], deleted: List[Space]) -> None:
        """Swap the live spaces and the deleted list in a single write."""
        state = self._read()
        self._set_spaces(state, spaces)
        state["deleted_spaces"] = [s.to_dict() for s in deleted]
        self._write(state)
        LOGGER.info("replaced spaces in %s: %d live, %d deleted", self.path, len(spaces), len(deleted))
