from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from eclipse_spaces.constants import APP_NAME

LOGGER = logging.getLogger(APP_NAME)

SETTINGS_SCHEMA_VERSION = 1
IMPORT_STRATEGIES = ("merge", "overwrite")


def app_dir() -> Path:
    """Return %APPDATA%\\eclipse_spaces (or $ECLIPSE_SPACES_HOME when set)."""
    override = os.environ.get("ECLIPSE_SPACES_HOME")
    if override:
        return Path(override)
    appdata = os.environ.get("APPDATA")
    if not appdata:
        appdata = str(Path.home() / "AppData" / "Roaming")
    return Path(appdata) / APP_NAME


def _default_settings() -> Dict[str, Any]:
    return {
        "schema_version": SETTINGS_SCHEMA_VERSION,
        "language": "auto",
        "import": {
            "preview_max_items": 10,
            "compress_icons": True,
        },
        "export": {
            "compress_icons": True,
            "last_dir": "",
        },
    }


def ensure_storage() -> Tuple[Path, Path]:
    """Create the app directory and default files; return (spaces_path, settings_path)."""
    base = app_dir()
    base.mkdir(parents=True, exist_ok=True)

    spaces_path = base / "spaces.json"
    settings_path = base / "settings.json"

    if not settings_path.exists():
        save_json(settings_path, _default_settings())
    return spaces_path, settings_path


def load_json(p: Path, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Load a JSON object, falling back to ``default`` on any problem.

    A file that fails to decode is moved aside as ``<name>.corrupted.<stamp>.json``
    so the next save does not overwrite the user's data.
    """
    if default is None:
        default = {}
    try:
        if not p.exists():
            LOGGER.warning("JSON file not found: %s, using default", p)
            return dict(default)
        data = json.loads(p.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            LOGGER.warning("JSON file %s is not a dict, using default", p)
            return dict(default)
        return data
    except json.JSONDecodeError as e:
        LOGGER.exception("JSON decode error in %s: %s", p, e)
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
        corrupted_path = p.with_name(f"{p.name}.corrupted.{stamp}.json")
        try:
            p.rename(corrupted_path)
            LOGGER.info("Corrupted file backed up to %s", corrupted_path)
        except OSError as move_exc:
            LOGGER.warning("Could not back up corrupted file %s: %s", p, move_exc)
        return dict(default)
    except OSError as e:
        LOGGER.exception("Failed to load JSON from %s: %s", p, e)
        return dict(default)


def save_json(p: Path, data: Dict[str, Any]) -> bool:
    """Write JSON atomically (temp file in the same directory + os.replace)."""
    try:
        content = json.dumps(data, ensure_ascii=False, indent=2)
        p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(suffix=".tmp", prefix=p.stem + "_", dir=str(p.parent))
    except (OSError, TypeError, ValueError) as e:
        LOGGER.exception("Failed to save JSON to %s: %s", p, e)
        return False

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, str(p))
        return True
    except OSError as e:
        LOGGER.exception("Failed to write temp file %s: %s", tmp_path, e)
        try:
            Path(tmp_path).unlink(missing_ok=True)
        except OSError:
            pass
        return False


def _migrate_import(settings: Dict[str, Any]) -> None:
    imp = settings.setdefault("import", {})
    if not isinstance(imp, dict):
        imp = {}
        settings["import"] = imp
    imp.setdefault("preview_max_items", 10)
    try:
        imp["preview_max_items"] = max(0, int(imp.get("preview_max_items") or 0))
    except (TypeError, ValueError):
        imp["preview_max_items"] = 10
    imp["compress_icons"] = bool(imp.get("compress_icons", True))


def _migrate_export(settings: Dict[str, Any]) -> None:
    exp = settings.setdefault("export", {})
    if not isinstance(exp, dict):
        exp = {}
        settings["export"] = exp
    exp["compress_icons"] = bool(exp.get("compress_icons", True))
    if not isinstance(exp.get("last_dir"), str):
        exp["last_dir"] = ""


def migrate_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Backfill missing keys for older settings.json."""
    settings.setdefault("schema_version", SETTINGS_SCHEMA_VERSION)
    settings["schema_version"] = max(SETTINGS_SCHEMA_VERSION, int(settings.get("schema_version", 1) or 1))
    if str(settings.get("language", "auto")).lower() not in ("auto", "en", "zh"):
        settings["language"] = "auto"
    settings.setdefault("language", "auto")

    _migrate_import(settings)
    _migrate_export(settings)
    return settings


def load_settings(settings_path: Path) -> Dict[str, Any]:
    return migrate_settings(load_json(settings_path, default=_default_settings()))
