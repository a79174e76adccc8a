from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from eclipse_spaces.constants import (
    CURRENT_SPACE_EXPORT_SCHEMA_VERSION,
    DEFAULT_ICON_TYPE,
    MULTI_SPACE_EXPORT_TYPE,
    SINGLE_SPACE_EXPORT_TYPE,
    SPACE_EXPORT_VERSION,
)


# -------- Wire format (export files / share codes) --------


@dataclass
class AppItem:
    """One exported dock entry. Folders carry ``children``; apps never do."""

    title: str
    type: Literal["app", "folder"]
    url: Optional[str] = None
    icon: Optional[str] = None
    children: Optional[List["AppItem"]] = None

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"title": self.title}
        if self.url:
            out["url"] = self.url
        if self.icon:
            out["icon"] = self.icon
        out["type"] = self.type
        if self.is_folder:
            out["children"] = [c.to_dict() for c in self.children or []]
        return out


@dataclass
class SpacePayload:
    name: str
    icon_type: str = DEFAULT_ICON_TYPE
    apps: List[AppItem] = field(default_factory=list)
    icon_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "iconType": self.icon_type}
        if self.icon_value:
            out["iconValue"] = self.icon_value
        out["apps"] = [a.to_dict() for a in self.apps]
        return out


@dataclass
class SpaceExportData:
    data: SpacePayload
    version: str = SPACE_EXPORT_VERSION
    schema_version: int = CURRENT_SPACE_EXPORT_SCHEMA_VERSION
    type: str = SINGLE_SPACE_EXPORT_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "schemaVersion": self.schema_version,
            "type": self.type,
            "data": self.data.to_dict(),
        }


@dataclass
class MultiSpaceExportData:
    spaces: List[SpacePayload]
    version: str = SPACE_EXPORT_VERSION
    schema_version: int = CURRENT_SPACE_EXPORT_SCHEMA_VERSION
    type: str = MULTI_SPACE_EXPORT_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "schemaVersion": self.schema_version,
            "type": self.type,
            "data": {"spaces": [s.to_dict() for s in self.spaces]},
        }


@dataclass
class ImportPayload:
    """Tagged variant over the two export envelopes."""

    kind: Literal["single", "multi"]
    data: Union[SpaceExportData, MultiSpaceExportData]

    @classmethod
    def single(cls, data: SpaceExportData) -> "ImportPayload":
        return cls(kind="single", data=data)

    @classmethod
    def multi(cls, data: MultiSpaceExportData) -> "ImportPayload":
        return cls(kind="multi", data=data)

    @property
    def is_multi(self) -> bool:
        return self.kind == "multi"

    def spaces(self) -> List[SpacePayload]:
        if isinstance(self.data, MultiSpaceExportData):
            return list(self.data.spaces)
        return [self.data.data]

    def to_dict(self) -> Dict[str, Any]:
        return self.data.to_dict()


# -------- Live spaces (what the dock renders) --------


@dataclass
class DockItem:
    id: str
    name: str
    type: Literal["app", "folder"]
    url: Optional[str] = None
    icon: Optional[str] = None
    items: Optional[List["DockItem"]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "name": self.name, "type": self.type}
        if self.url:
            out["url"] = self.url
        if self.icon:
            out["icon"] = self.icon
        if self.items is not None:
            out["items"] = [i.to_dict() for i in self.items]
        return out

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DockItem":
        items = raw.get("items")
        return cls(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            type="folder" if raw.get("type") == "folder" else "app",
            url=raw.get("url") or None,
            icon=raw.get("icon") or None,
            items=[cls.from_dict(i) for i in items if isinstance(i, dict)] if isinstance(items, list) else None,
        )


@dataclass
class Space:
    id: str
    name: str
    icon_type: str = DEFAULT_ICON_TYPE
    apps: List[DockItem] = field(default_factory=list)
    created_at: int = 0
    icon_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "iconType": self.icon_type,
            "apps": [a.to_dict() for a in self.apps],
            "createdAt": self.created_at,
        }
        if self.icon_value:
            out["iconValue"] = self.icon_value
        return out

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Space":
        apps = raw.get("apps")
        return cls(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            icon_type=str(raw.get("iconType") or DEFAULT_ICON_TYPE),
            apps=[DockItem.from_dict(a) for a in apps if isinstance(a, dict)] if isinstance(apps, list) else [],
            created_at=int(raw.get("createdAt", 0) or 0),
            icon_value=raw.get("iconValue") or None,
        )


# -------- Preview --------


@dataclass
class SpaceImportPreviewItem:
    original_name: str
    final_name: str
    app_item_count: int

    @property
    def renamed(self) -> bool:
        return self.final_name != self.original_name


@dataclass
class SpaceImportPreview:
    incoming_spaces: int = 0
    selected_spaces: int = 0
    name_conflicts: int = 0
    total_app_items: int = 0
    items: List[SpaceImportPreviewItem] = field(default_factory=list)
