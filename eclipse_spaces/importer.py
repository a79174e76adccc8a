from __future__ import annotations

import time
import uuid
from typing import Callable, List, Optional, Sequence

from eclipse_spaces.constants import DEFAULT_ICON_TYPE
from eclipse_spaces.icons import IconCompressor, compress_icons_in_items
from eclipse_spaces.models import (
    AppItem,
    DockItem,
    ImportPayload,
    MultiSpaceExportData,
    Space,
    SpaceExportData,
    SpacePayload,
)
from eclipse_spaces.preview import unique_space_name


def new_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


def _dock_item(item: AppItem, id_factory: Callable[[], str]) -> DockItem:
    dock = DockItem(id=id_factory(), name=item.title, type=item.type, url=item.url, icon=item.icon)
    if item.is_folder:
        dock.items = [_dock_item(c, id_factory) for c in item.children or []]
    return dock


def _build_space(
    payload: SpacePayload,
    name: str,
    compress: Optional[IconCompressor],
    id_factory: Callable[[], str],
    created_at: int,
) -> Space:
    apps = [_dock_item(a, id_factory) for a in payload.apps]
    if compress is not None:
        apps = compress_icons_in_items(apps, compress)
    return Space(
        id=id_factory(),
        name=name,
        icon_type=payload.icon_type or DEFAULT_ICON_TYPE,
        icon_value=payload.icon_value,
        apps=apps,
        created_at=created_at,
    )


def create_spaces_from_payloads(
    payloads: Sequence[SpacePayload],
    existing_spaces: Sequence[Space],
    compress: Optional[IconCompressor] = None,
    id_factory: Callable[[], str] = new_id,
) -> List[Space]:
    """Turn wire payloads into new live spaces.

    Names are resolved left to right against live names and the names handed out
    earlier in the same batch, matching :func:`build_space_import_preview`.
    """
    taken = {s.name for s in existing_spaces}
    created_at = now_ms()
    out: List[Space] = []
    for payload in payloads:
        name = unique_space_name(payload.name, taken)
        taken.add(name)
        out.append(_build_space(payload, name, compress, id_factory, created_at))
    return out


def create_space_from_import(
    data: SpaceExportData,
    existing_spaces: Sequence[Space],
    compress: Optional[IconCompressor] = None,
    id_factory: Callable[[], str] = new_id,
) -> Space:
    return create_spaces_from_payloads([data.data], existing_spaces, compress, id_factory)[0]


def create_spaces_from_multi_import(
    data: MultiSpaceExportData,
    existing_spaces: Sequence[Space],
    compress: Optional[IconCompressor] = None,
    id_factory: Callable[[], str] = new_id,
) -> List[Space]:
    return create_spaces_from_payloads(data.spaces, existing_spaces, compress, id_factory)


def create_spaces_from_import(
    payload: ImportPayload,
    existing_spaces: Sequence[Space],
    compress: Optional[IconCompressor] = None,
    id_factory: Callable[[], str] = new_id,
) -> List[Space]:
    return create_spaces_from_payloads(payload.spaces(), existing_spaces, compress, id_factory)
