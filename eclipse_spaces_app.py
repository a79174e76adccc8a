from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from PySide6 import QtWidgets

from eclipse_spaces.app_storage import ensure_storage, load_settings, save_json
from eclipse_spaces.constants import APP_NAME
from eclipse_spaces.core.logging import setup_logging
from eclipse_spaces.errors import SpaceImportError, SpaceStoreError, UnsupportedSchemaVersion
from eclipse_spaces.i18n import tr
from eclipse_spaces.services import SpaceTransferService, prompt_import_strategy
from eclipse_spaces.store import JsonSpaceStore
from eclipse_spaces.ui.dialogs.space_import import SpaceImportPreviewDialog

LOGGER = logging.getLogger(APP_NAME)


def _confirm(parent: Optional[QtWidgets.QWidget], message: str) -> bool:
    answer = QtWidgets.QMessageBox.question(
        parent,
        "",
        message,
        QtWidgets.QMessageBox.Ok | QtWidgets.QMessageBox.Cancel,
    )
    return answer == QtWidgets.QMessageBox.Ok


def _pick_file(lang: str, start_dir: Optional[Path]) -> Optional[Path]:
    path, _ = QtWidgets.QFileDialog.getOpenFileName(
        None, tr("dialog.open", lang), str(start_dir or ""), "JSON (*.json)"
    )
    return Path(path) if path else None


def _warn(lang: str, message: str) -> None:
    QtWidgets.QMessageBox.warning(None, tr("dialog.error", lang), message)


def run_import(service: SpaceTransferService, path: Path) -> int:
    lang = service.language()
    try:
        payload = service.read_import_file(path)
    except UnsupportedSchemaVersion as exc:
        _warn(lang, tr("error.unsupported_schema", lang).format(version=exc.version))
        return 1
    except SpaceImportError as exc:
        _warn(lang, str(exc))
        return 1

    strategy = prompt_import_strategy(lang, lambda msg: _confirm(None, msg))
    if strategy is None:
        LOGGER.info("import of %s cancelled at strategy prompt", path.name)
        return 0

    try:
        existing = service.existing_spaces(strategy)
    except SpaceStoreError as exc:
        LOGGER.exception("load spaces: %s", exc)
        _warn(lang, str(exc))
        return 1

    dlg = SpaceImportPreviewDialog(None, payload, existing, lang=lang, max_items=service.preview_max_items())
    if dlg.exec() != QtWidgets.QDialog.Accepted:
        LOGGER.info("import of %s cancelled at preview", path.name)
        return 0

    selected = dlg.selected_payload()
    if selected is None:
        return 0
    try:
        created = service.commit(selected, strategy)
    except SpaceStoreError as exc:
        LOGGER.exception("commit import: %s", exc)
        _warn(lang, str(exc))
        return 1

    QtWidgets.QMessageBox.information(None, tr("dialog.title", lang), tr("dialog.done", lang).format(count=len(created)))
    return 0


def main() -> None:
    app = QtWidgets.QApplication(sys.argv)

    log_file = setup_logging()
    LOGGER.info("Starting eclipse_spaces importer (log: %s)", log_file)

    spaces_path, settings_path = ensure_storage()
    settings = load_settings(settings_path)
    save_json(settings_path, settings)

    service = SpaceTransferService(JsonSpaceStore(spaces_path), settings)
    args = app.arguments()[1:]
    if args:
        path: Optional[Path] = Path(args[0])
    else:
        path = _pick_file(service.language(), service.last_dir())
        if path is not None:
            service.remember_dir(path.parent)
            save_json(settings_path, service.settings)
    if path is None:
        sys.exit(0)
    sys.exit(run_import(service, path))


if __name__ == "__main__":
    main()
