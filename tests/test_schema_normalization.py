from __future__ import annotations

import pytest

from eclipse_spaces.constants import CURRENT_SPACE_EXPORT_SCHEMA_VERSION, MAX_APP_ITEM_DEPTH
from eclipse_spaces.errors import InvalidDockItemType, InvalidSpaceExport, UnsupportedSchemaVersion
from eclipse_spaces.models import MultiSpaceExportData, SpaceExportData
from eclipse_spaces.schema import normalize_multi, normalize_single, parse_import_payload, parse_import_text


def test_single_without_schema_version_is_lifted_to_current(single_export) -> None:
    normalized = normalize_single(single_export("Main", schema_version=None))
    assert isinstance(normalized, SpaceExportData)
    assert normalized.schema_version == CURRENT_SPACE_EXPORT_SCHEMA_VERSION
    assert normalized.data.name == "Main"
    assert len(normalized.data.apps) == 2


def test_multi_without_schema_version_is_lifted_to_current(multi_export) -> None:
    normalized = normalize_multi(multi_export(["Main"], schema_version=None))
    assert isinstance(normalized, MultiSpaceExportData)
    assert normalized.schema_version == CURRENT_SPACE_EXPORT_SCHEMA_VERSION
    assert [s.name for s in normalized.spaces] == ["Main"]


def test_future_schema_version_is_rejected(single_export, multi_export) -> None:
    future = CURRENT_SPACE_EXPORT_SCHEMA_VERSION + 1
    with pytest.raises(UnsupportedSchemaVersion, match="Unsupported space import schema version") as info:
        normalize_single(single_export("Main", schema_version=future))
    assert info.value.version == future
    assert info.value.current == CURRENT_SPACE_EXPORT_SCHEMA_VERSION

    with pytest.raises(UnsupportedSchemaVersion):
        normalize_multi(multi_export(["Main"], schema_version=future))


@pytest.mark.parametrize("bad", ["1", 1.5, True, -1])
def test_malformed_schema_version_is_rejected(single_export, bad) -> None:
    with pytest.raises(InvalidSpaceExport):
        normalize_single(single_export("Main", schema_version=bad))


def test_normalizing_current_payload_is_idempotent(single_export, multi_export) -> None:
    once = normalize_single(single_export("Main"))
    assert normalize_single(once) == once
    assert normalize_single(once.to_dict()) == once

    multi_once = normalize_multi(multi_export(["Main", "Work"]))
    assert normalize_multi(multi_once.to_dict()) == multi_once


def test_field_whitelist_and_trimming() -> None:
    raw = {
        "version": "1.0",
        "schemaVersion": 1,
        "type": "eclipse-space-export",
        "ignoredRootField": "x",
        "data": {
            "name": " Main ",
            "iconType": "text",
            "iconValue": "  icon-name  ",
            "ignoredDataField": True,
            "apps": [
                {
                    "title": " App ",
                    "url": " https://a.example ",
                    "icon": " data:image/png;base64,xx ",
                    "type": "app",
                    "unknown": 1,
                }
            ],
        },
    }

    out = normalize_single(raw).to_dict()

    assert list(out.keys()) == ["version", "schemaVersion", "type", "data"]
    assert out["data"]["name"] == "Main"
    assert out["data"]["iconValue"] == "icon-name"
    assert out["data"]["apps"][0] == {
        "title": "App",
        "url": "https://a.example",
        "icon": "data:image/png;base64,xx",
        "type": "app",
    }


def test_invalid_dock_item_type_is_rejected(single_export) -> None:
    raw = single_export("Main")
    raw["data"]["apps"].append({"title": "Bad", "type": "invalid"})
    with pytest.raises(InvalidDockItemType, match="Invalid dock item type"):
        normalize_single(raw)


def test_unknown_icon_type_falls_back_to_text(single_export) -> None:
    raw = single_export("Main")
    raw["data"]["iconType"] = "sparkles"
    assert normalize_single(raw).data.icon_type == "text"


def test_structural_validation_failures(single_export, multi_export) -> None:
    wrong_type = single_export("Main")
    wrong_type["type"] = "something-else"
    with pytest.raises(InvalidSpaceExport):
        normalize_single(wrong_type)

    no_name = single_export("  ")
    with pytest.raises(InvalidSpaceExport):
        normalize_single(no_name)

    no_apps = single_export("Main")
    no_apps["data"]["apps"] = "nope"
    with pytest.raises(InvalidSpaceExport):
        normalize_single(no_apps)

    empty_bundle = multi_export([])
    with pytest.raises(InvalidSpaceExport):
        normalize_multi(empty_bundle)

    with pytest.raises(InvalidSpaceExport):
        normalize_single(["not", "an", "object"])


def test_urls_and_icons_are_not_validated(single_export) -> None:
    raw = single_export("Main")
    raw["data"]["apps"][0]["url"] = "not a url"
    raw["data"]["apps"][0]["icon"] = "???"
    app = normalize_single(raw).data.apps[0]
    assert app.url == "not a url"
    assert app.icon == "???"


def test_pathological_folder_depth_is_rejected(single_export) -> None:
    leaf = {"title": "leaf", "type": "app", "url": "https://x.example"}
    node = leaf
    for i in range(MAX_APP_ITEM_DEPTH + 1):
        node = {"title": f"f{i}", "type": "folder", "children": [node]}
    raw = single_export("Deep")
    raw["data"]["apps"] = [node]
    with pytest.raises(InvalidSpaceExport, match="nesting"):
        normalize_single(raw)


def test_folder_without_children_gets_empty_list(single_export) -> None:
    raw = single_export("Main")
    raw["data"]["apps"] = [{"title": "Empty", "type": "folder"}]
    folder = normalize_single(raw).data.apps[0]
    assert folder.children == []
    assert folder.to_dict() == {"title": "Empty", "type": "folder", "children": []}


def test_parse_import_payload_detects_envelope(single_export, multi_export) -> None:
    single = parse_import_payload(single_export("Main"))
    assert single.kind == "single"
    assert [s.name for s in single.spaces()] == ["Main"]

    multi = parse_import_payload(multi_export(["Main", "Work"]))
    assert multi.kind == "multi"
    assert [s.name for s in multi.spaces()] == ["Main", "Work"]

    with pytest.raises(InvalidSpaceExport, match="missing required fields"):
        parse_import_payload({"type": "unknown"})


def test_parse_import_text_rejects_bad_json() -> None:
    with pytest.raises(InvalidSpaceExport, match="Invalid JSON file"):
        parse_import_text("{ not json")


def test_parse_import_text_rejects_json_too_deep_to_decode() -> None:
    depth = 100_000
    text = (
        '{"type":"eclipse-space-export","data":{"name":"M","apps":['
        + '{"title":"f","type":"folder","children":[' * depth
        + "]}" * depth
        + "]}}"
    )
    with pytest.raises(InvalidSpaceExport, match="Invalid JSON file"):
        parse_import_text(text)
