from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from eclipse_spaces.errors import NoSpacesSelected
from eclipse_spaces.i18n import tr
from eclipse_spaces.models import (
    AppItem,
    ImportPayload,
    MultiSpaceExportData,
    Space,
    SpaceImportPreview,
    SpaceImportPreviewItem,
)


def unique_space_name(base_name: str, taken: Iterable[str]) -> str:
    """Return ``base_name`` or the first free ``"base_name (n)"``, n starting at 1."""
    names = set(taken)
    if base_name not in names:
        return base_name
    counter = 1
    candidate = f"{base_name} ({counter})"
    while candidate in names:
        counter += 1
        candidate = f"{base_name} ({counter})"
    return candidate


def count_app_items(items: Sequence[AppItem]) -> int:
    """Count every node, folders included, the way the dock renders them."""
    total = 0
    stack: List[AppItem] = list(items)
    while stack:
        item = stack.pop()
        total += 1
        if item.children:
            stack.extend(item.children)
    return total


def pick_multi_space_import_data(
    multi: MultiSpaceExportData, indices: Iterable[int]
) -> MultiSpaceExportData:
    """Project a bundle onto the given zero-based indices.

    Indices outside the bundle are skipped; an empty projection raises
    :class:`NoSpacesSelected`.
    """
    spaces = [multi.spaces[i] for i in indices if 0 <= i < len(multi.spaces)]
    if not spaces:
        raise NoSpacesSelected()
    return MultiSpaceExportData(
        spaces=spaces,
        version=multi.version,
        schema_version=multi.schema_version,
        type=multi.type,
    )


def build_space_import_preview(
    payload: ImportPayload, existing_spaces: Sequence[Space]
) -> SpaceImportPreview:
    incoming = payload.spaces()
    taken: Set[str] = {s.name for s in existing_spaces}
    preview = SpaceImportPreview(incoming_spaces=len(incoming), selected_spaces=len(incoming))

    for space in incoming:
        final_name = unique_space_name(space.name, taken)
        taken.add(final_name)
        item = SpaceImportPreviewItem(
            original_name=space.name,
            final_name=final_name,
            app_item_count=count_app_items(space.apps),
        )
        if item.renamed:
            preview.name_conflicts += 1
        preview.total_app_items += item.app_item_count
        preview.items.append(item)

    return preview


def format_space_import_preview_message(
    preview: SpaceImportPreview, lang: str = "en", max_items: Optional[int] = None
) -> str:
    lines = [
        tr("preview.header", lang).format(count=preview.selected_spaces),
        tr("preview.conflicts", lang).format(count=preview.name_conflicts),
        tr("preview.total_items", lang).format(count=preview.total_app_items),
    ]

    shown = preview.items
    if max_items is not None and max_items > 0:
        shown = preview.items[:max_items]

    for idx, item in enumerate(shown, 1):
        if item.renamed:
            lines.append(f"[{idx}] {item.original_name} -> {item.final_name}")
        else:
            lines.append(f"[{idx}] {item.original_name}")

    omitted = len(preview.items) - len(shown)
    if omitted > 0:
        lines.append(tr("preview.more", lang).format(count=omitted))
    return "\n".join(lines)
