from __future__ import annotations

from eclipse_spaces.app_storage import migrate_settings


def test_migrate_settings_backfills_import_and_export_sections() -> None:
    settings = migrate_settings({})
    assert settings["schema_version"] >= 1
    assert settings["language"] == "auto"
    assert settings["import"]["preview_max_items"] == 10
    assert settings["import"]["compress_icons"] is True
    assert settings["export"]["compress_icons"] is True
    assert settings["export"]["last_dir"] == ""


def test_migrate_settings_repairs_bad_values() -> None:
    settings = migrate_settings(
        {
            "language": "klingon",
            "import": {"preview_max_items": "lots"},
            "export": {"last_dir": 42},
        }
    )
    assert settings["language"] == "auto"
    assert settings["import"]["preview_max_items"] == 10
    assert settings["export"]["compress_icons"] is True
    assert settings["export"]["last_dir"] == ""

    assert migrate_settings({"export": "nope"})["export"] == {"compress_icons": True, "last_dir": ""}


def test_migrate_settings_keeps_user_choices() -> None:
    settings = migrate_settings(
        {
            "language": "zh",
            "import": {"preview_max_items": 3, "compress_icons": False},
            "export": {"last_dir": "D:/exports"},
        }
    )
    assert settings["language"] == "zh"
    assert settings["import"] == {"preview_max_items": 3, "compress_icons": False}
    assert settings["export"]["last_dir"] == "D:/exports"
