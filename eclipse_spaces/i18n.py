from __future__ import annotations

from typing import Dict

SUPPORTED_LANGUAGES = ("en", "zh")
DEFAULT_LANGUAGE = "en"

_STRINGS: Dict[str, Dict[str, str]] = {
    "en": {
        "preview.header": "Importing spaces: {count}",
        "preview.conflicts": "Name conflicts: {count}",
        "preview.total_items": "Total items: {count}",
        "preview.more": "... {count} more",
        "strategy.merge": "Import strategy: OK = merge import; Cancel = continue to overwrite option.",
        "strategy.overwrite": "Use overwrite import? (Cancel to abort this import)",
        "dialog.title": "Import spaces",
        "dialog.selection": "Spaces to import (e.g. 1,3-4):",
        "dialog.import": "Import",
        "dialog.cancel": "Cancel",
        "dialog.open": "Open space export",
        "dialog.error": "Error",
        "dialog.done": "Imported {count} space(s).",
        "error.unsupported_schema": "This file was exported by a newer version ({version}). Please update before importing.",
    },
    "zh": {
        "preview.header": "将导入空间：{count} 项",
        "preview.conflicts": "重名冲突：{count}",
        "preview.total_items": "项目总数：{count}",
        "preview.more": "... 还有 {count} 项",
        "strategy.merge": "导入策略：确定 = 合并导入；取消 = 继续选择覆盖导入。",
        "strategy.overwrite": "是否使用覆盖导入？（取消则放弃本次导入）",
        "dialog.title": "导入空间",
        "dialog.selection": "选择要导入的空间（例如 1,3-4）：",
        "dialog.import": "导入",
        "dialog.cancel": "取消",
        "dialog.open": "打开空间导出文件",
        "dialog.error": "错误",
        "dialog.done": "已导入 {count} 个空间。",
        "error.unsupported_schema": "该文件由更新的版本导出（{version}），请先升级后再导入。",
    },
}


def normalize_language(lang: str) -> str:
    code = str(lang or "").strip().lower().replace("_", "-")
    base = code.split("-", 1)[0]
    return base if base in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def resolve_language(setting: str) -> str:
    """Turn the ``language`` setting (auto/en/zh) into a concrete table key."""
    if str(setting or "auto").strip().lower() != "auto":
        return normalize_language(setting)
    from PySide6 import QtCore

    return normalize_language(QtCore.QLocale.system().name())


def tr(key: str, lang: str = DEFAULT_LANGUAGE) -> str:
    table = _STRINGS[normalize_language(lang)]
    return table.get(key) or _STRINGS[DEFAULT_LANGUAGE].get(key, key)
