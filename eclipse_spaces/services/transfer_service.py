from __future__ import annotations

import logging
from copy import deepcopy
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from eclipse_spaces.app_storage import IMPORT_STRATEGIES, migrate_settings
from eclipse_spaces.constants import APP_NAME
from eclipse_spaces.errors import InvalidSpaceExport, SpaceImportError, SpaceStoreError
from eclipse_spaces.exporter import (
    all_spaces_export_filename,
    build_multi_space_export,
    build_space_export,
    export_names,
    space_export_filename,
    write_export_file,
)
from eclipse_spaces.i18n import resolve_language
from eclipse_spaces.icons import IconCompressor, compress_icon
from eclipse_spaces.importer import create_spaces_from_import
from eclipse_spaces.models import ImportPayload, Space, SpaceImportPreview
from eclipse_spaces.preview import (
    build_space_import_preview,
    format_space_import_preview_message,
    pick_multi_space_import_data,
)
from eclipse_spaces.schema import parse_import_text
from eclipse_spaces.selection import parse_selection
from eclipse_spaces.share_code import decode_space_share_code
from eclipse_spaces.store import SpaceStore

LOGGER = logging.getLogger(APP_NAME)


class SpaceTransferService:
    """Import/export flow on top of a space store: read, select, preview, commit."""

    def __init__(
        self,
        store: SpaceStore,
        settings: Optional[Dict[str, Any]] = None,
        *,
        compress: Optional[IconCompressor] = None,
    ) -> None:
        self.store = store
        self.settings = migrate_settings(deepcopy(settings or {}))
        self._compress = compress or compress_icon

    def _compressor(self, section: str) -> Optional[IconCompressor]:
        if not self.settings.get(section, {}).get("compress_icons", True):
            return None
        return self._compress

    def language(self) -> str:
        return resolve_language(self.settings.get("language", "auto"))

    # -------- Import --------

    def read_import_file(self, path: Path) -> ImportPayload:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.exception("read import file %s: %s", path, exc)
            raise InvalidSpaceExport("Failed to read file") from exc
        try:
            payload = parse_import_text(text)
        except SpaceImportError as exc:
            LOGGER.warning("import file %s rejected: %s", path, exc)
            raise
        LOGGER.info("import file %s: %s payload with %d space(s)", path.name, payload.kind, len(payload.spaces()))
        return payload

    def decode_share_code(self, code: str) -> ImportPayload:
        try:
            payload = decode_space_share_code(code)
        except SpaceImportError as exc:
            LOGGER.warning("share code rejected: %s", exc)
            raise
        LOGGER.info("share code: %s payload with %d space(s)", payload.kind, len(payload.spaces()))
        return payload

    @staticmethod
    def select_spaces(payload: ImportPayload, selection: str) -> ImportPayload:
        """Narrow a bundle to the user's selection; single payloads pass through."""
        if not payload.is_multi:
            return payload
        indices = parse_selection(selection, len(payload.spaces()))
        return ImportPayload.multi(pick_multi_space_import_data(payload.data, indices))

    def existing_spaces(self, strategy: str = "merge") -> List[Space]:
        """Live spaces an import is checked against; none when overwriting."""
        if strategy == "overwrite":
            return []
        return self.store.load_spaces()

    def preview_max_items(self) -> Optional[int]:
        return int(self.settings["import"].get("preview_max_items") or 0) or None

    def preview(self, payload: ImportPayload, strategy: str = "merge") -> SpaceImportPreview:
        return build_space_import_preview(payload, self.existing_spaces(strategy))

    def preview_message(self, preview: SpaceImportPreview, lang: Optional[str] = None) -> str:
        return format_space_import_preview_message(preview, lang or self.language(), self.preview_max_items())

    def commit(self, payload: ImportPayload, strategy: str = "merge") -> List[Space]:
        """Write the payload into the store.

        ``merge`` appends renamed copies next to the live spaces. ``overwrite``
        replaces them and keeps the replaced spaces in the deleted-spaces list.
        """
        if strategy not in IMPORT_STRATEGIES:
            raise ValueError(f"Unknown import strategy: {strategy!r}")

        compress = self._compressor("import")
        existing = self.store.load_spaces()
        if strategy == "overwrite":
            created = create_spaces_from_import(payload, [], compress)
            self.store.replace_spaces(created, existing + self.store.load_deleted_spaces())
        else:
            created = create_spaces_from_import(payload, existing, compress)
            self.store.save_spaces(existing + created)

        LOGGER.info(
            "import committed (%s): %s",
            strategy,
            ", ".join(s.name for s in created),
        )
        return created

    # -------- Export --------

    def last_dir(self) -> Optional[Path]:
        raw = self.settings["export"].get("last_dir") or ""
        return Path(raw) if raw else None

    def remember_dir(self, directory: Path) -> None:
        self.settings["export"]["last_dir"] = str(directory)

    @staticmethod
    def default_export_filename(spaces: Sequence[Space], today: Optional[date] = None) -> str:
        if len(spaces) == 1:
            return space_export_filename(spaces[0], today)
        return all_spaces_export_filename(today)

    def default_export_path(self, spaces: Sequence[Space], today: Optional[date] = None) -> Path:
        return (self.last_dir() or Path.home()) / self.default_export_filename(spaces, today)

    def export_spaces(self, spaces: Sequence[Space], path: Path) -> Path:
        if not spaces:
            raise ValueError("Nothing to export")
        compress = self._compressor("export")
        if len(spaces) == 1:
            export = build_space_export(spaces[0], compress)
        else:
            export = build_multi_space_export(spaces, compress)
        if not write_export_file(path, export):
            raise SpaceStoreError(f"Failed to write export file {path}")
        LOGGER.info("exported %s to %s", ", ".join(export_names(export)), path)
        self.remember_dir(path.parent)
        return path
