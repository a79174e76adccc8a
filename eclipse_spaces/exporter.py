from __future__ import annotations

import re
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence, Union

from eclipse_spaces.app_storage import save_json
from eclipse_spaces.icons import IconCompressor
from eclipse_spaces.models import (
    AppItem,
    DockItem,
    MultiSpaceExportData,
    Space,
    SpaceExportData,
    SpacePayload,
)


def _export_item(item: DockItem, compress: Optional[IconCompressor]) -> AppItem:
    icon = item.icon
    if icon and compress is not None:
        icon = compress(icon)
    exported = AppItem(title=item.name, type=item.type, url=item.url or None, icon=icon or None)
    if item.type == "folder":
        exported.children = [_export_item(c, compress) for c in item.items or []]
    return exported


def _space_payload(space: Space, compress: Optional[IconCompressor]) -> SpacePayload:
    return SpacePayload(
        name=space.name,
        icon_type=space.icon_type,
        icon_value=space.icon_value,
        apps=[_export_item(a, compress) for a in space.apps],
    )


def build_space_export(space: Space, compress: Optional[IconCompressor] = None) -> SpaceExportData:
    """Wire form of one live space. Item ids are dropped; import mints new ones."""
    return SpaceExportData(data=_space_payload(space, compress))


def build_multi_space_export(
    spaces: Sequence[Space], compress: Optional[IconCompressor] = None
) -> MultiSpaceExportData:
    return MultiSpaceExportData(spaces=[_space_payload(s, compress) for s in spaces])


def _stamp(today: Optional[date]) -> str:
    return (today or date.today()).strftime("%Y%m%d")


def space_export_filename(space: Space, today: Optional[date] = None) -> str:
    safe_name = re.sub(r"[^a-z0-9]", "-", space.name.lower())
    return f"eclipse-space-{safe_name}-{_stamp(today)}.json"


def all_spaces_export_filename(today: Optional[date] = None) -> str:
    return f"eclipse-all-spaces-{_stamp(today)}.json"


def write_export_file(path: Path, export: Union[SpaceExportData, MultiSpaceExportData]) -> bool:
    return save_json(path, export.to_dict())


def export_names(export: Union[SpaceExportData, MultiSpaceExportData]) -> List[str]:
    if isinstance(export, MultiSpaceExportData):
        return [s.name for s in export.spaces]
    return [export.data.name]
