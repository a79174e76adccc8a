from __future__ import annotations

import json
from typing import Any, Callable, Dict, Mapping, Optional, Union

from eclipse_spaces.constants import (
    APP_ITEM_TYPES,
    CURRENT_SPACE_EXPORT_SCHEMA_VERSION,
    DEFAULT_ICON_TYPE,
    ICON_TYPES,
    MAX_APP_ITEM_DEPTH,
    MULTI_SPACE_EXPORT_TYPE,
    SINGLE_SPACE_EXPORT_TYPE,
    SPACE_EXPORT_VERSION,
)
from eclipse_spaces.errors import InvalidDockItemType, InvalidSpaceExport, UnsupportedSchemaVersion
from eclipse_spaces.models import (
    AppItem,
    ImportPayload,
    MultiSpaceExportData,
    SpaceExportData,
    SpacePayload,
)

# Exports written before the schemaVersion field existed.
LEGACY_SCHEMA_VERSION = 0


def _upgrade_from_legacy(raw: Dict[str, Any]) -> Dict[str, Any]:
    # v0 -> v1 only introduced the schemaVersion field.
    return raw


# Each step lifts a payload from the keyed version to the next one.
_SCHEMA_STEPS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    LEGACY_SCHEMA_VERSION: _upgrade_from_legacy,
}


def _as_mapping(payload: Any) -> Dict[str, Any]:
    if isinstance(payload, (SpaceExportData, MultiSpaceExportData)):
        return payload.to_dict()
    if not isinstance(payload, Mapping):
        raise InvalidSpaceExport("Invalid file format: expected a JSON object")
    return dict(payload)


def _clean_str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _optional_str(value: Any) -> Optional[str]:
    cleaned = _clean_str(value)
    return cleaned or None


def _read_schema_version(raw: Mapping[str, Any]) -> int:
    if "schemaVersion" not in raw or raw.get("schemaVersion") is None:
        return LEGACY_SCHEMA_VERSION
    value = raw.get("schemaVersion")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSpaceExport(f"Invalid schemaVersion: {value!r}")
    if value < LEGACY_SCHEMA_VERSION:
        raise InvalidSpaceExport(f"Invalid schemaVersion: {value!r}")
    return value


def _upgrade(raw: Dict[str, Any]) -> Dict[str, Any]:
    version = _read_schema_version(raw)
    if version > CURRENT_SPACE_EXPORT_SCHEMA_VERSION:
        raise UnsupportedSchemaVersion(version, CURRENT_SPACE_EXPORT_SCHEMA_VERSION)
    while version < CURRENT_SPACE_EXPORT_SCHEMA_VERSION:
        step = _SCHEMA_STEPS.get(version)
        if step is not None:
            raw = step(raw)
        version += 1
    raw["schemaVersion"] = version
    return raw


def _normalize_item(raw: Any, depth: int) -> AppItem:
    if depth > MAX_APP_ITEM_DEPTH:
        raise InvalidSpaceExport(f"Folder nesting exceeds {MAX_APP_ITEM_DEPTH} levels")
    if not isinstance(raw, Mapping):
        raise InvalidSpaceExport("Invalid dock item: expected a JSON object")
    item_type = raw.get("type")
    if item_type not in APP_ITEM_TYPES:
        raise InvalidDockItemType(item_type)

    item = AppItem(
        title=_clean_str(raw.get("title")),
        type=item_type,
        url=_optional_str(raw.get("url")),
        icon=_optional_str(raw.get("icon")),
    )
    if item_type == "folder":
        children = raw.get("children")
        if children is None:
            children = []
        if not isinstance(children, list):
            raise InvalidSpaceExport("Invalid folder: children must be a list")
        item.children = [_normalize_item(c, depth + 1) for c in children]
    return item


def _normalize_space_payload(raw: Any) -> SpacePayload:
    if not isinstance(raw, Mapping):
        raise InvalidSpaceExport("Invalid file format: space data must be an object")
    name = _clean_str(raw.get("name"))
    if not name:
        raise InvalidSpaceExport("Invalid file format: missing space name")
    apps = raw.get("apps")
    if not isinstance(apps, list):
        raise InvalidSpaceExport("Invalid file format: apps must be a list")

    icon_type = _clean_str(raw.get("iconType"))
    if icon_type not in ICON_TYPES:
        icon_type = DEFAULT_ICON_TYPE

    return SpacePayload(
        name=name,
        icon_type=icon_type,
        icon_value=_optional_str(raw.get("iconValue")),
        apps=[_normalize_item(a, 1) for a in apps],
    )


def _check_type(raw: Mapping[str, Any], expected: str) -> None:
    if raw.get("type") != expected:
        raise InvalidSpaceExport(
            f"Invalid file format: expected type {expected!r}, got {raw.get('type')!r}"
        )


def _read_version(raw: Mapping[str, Any]) -> str:
    return _clean_str(raw.get("version")) or SPACE_EXPORT_VERSION


def normalize_single(payload: Union[Mapping[str, Any], SpaceExportData]) -> SpaceExportData:
    """Validate a single-space export and lift it to the current schema version.

    Unknown keys are dropped and string fields trimmed, so the result only carries
    ``version``, ``schemaVersion``, ``type`` and ``data``. Payloads written by a newer
    build raise :class:`UnsupportedSchemaVersion` before anything else is read.
    """
    raw = _as_mapping(payload)
    _check_type(raw, SINGLE_SPACE_EXPORT_TYPE)
    raw = _upgrade(raw)
    return SpaceExportData(
        version=_read_version(raw),
        schema_version=raw["schemaVersion"],
        type=SINGLE_SPACE_EXPORT_TYPE,
        data=_normalize_space_payload(raw.get("data")),
    )


def normalize_multi(payload: Union[Mapping[str, Any], MultiSpaceExportData]) -> MultiSpaceExportData:
    """Multi-space counterpart of :func:`normalize_single`."""
    raw = _as_mapping(payload)
    _check_type(raw, MULTI_SPACE_EXPORT_TYPE)
    raw = _upgrade(raw)
    data = raw.get("data")
    if not isinstance(data, Mapping):
        raise InvalidSpaceExport("Invalid file format: data must be an object")
    spaces = data.get("spaces")
    if not isinstance(spaces, list) or not spaces:
        raise InvalidSpaceExport("Invalid file format: spaces must be a non-empty list")
    return MultiSpaceExportData(
        version=_read_version(raw),
        schema_version=raw["schemaVersion"],
        type=MULTI_SPACE_EXPORT_TYPE,
        spaces=[_normalize_space_payload(s) for s in spaces],
    )


def parse_import_payload(raw: Any) -> ImportPayload:
    """Detect the envelope kind from its ``type`` tag and normalize it."""
    if isinstance(raw, ImportPayload):
        raw = raw.to_dict()
    data = _as_mapping(raw)
    kind = data.get("type")
    if kind == MULTI_SPACE_EXPORT_TYPE:
        return ImportPayload.multi(normalize_multi(data))
    if kind == SINGLE_SPACE_EXPORT_TYPE:
        return ImportPayload.single(normalize_single(data))
    raise InvalidSpaceExport("Invalid file format: missing required fields")


def parse_import_text(text: str) -> ImportPayload:
    try:
        raw = json.loads(text)
    except (TypeError, ValueError, RecursionError) as exc:
        raise InvalidSpaceExport("Invalid JSON file") from exc
    return parse_import_payload(raw)
