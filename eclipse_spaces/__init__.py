"""Space export/import engine: versioned bundles, selection, preview and commit."""

from .constants import CURRENT_SPACE_EXPORT_SCHEMA_VERSION
from .errors import (
    InvalidDockItemType,
    InvalidSelectionToken,
    InvalidShareCode,
    InvalidSpaceExport,
    NoSpacesSelected,
    SelectionOutOfRange,
    SpaceImportError,
    SpaceStoreError,
    UnsupportedSchemaVersion,
)
from .models import (
    AppItem,
    DockItem,
    ImportPayload,
    MultiSpaceExportData,
    Space,
    SpaceExportData,
    SpaceImportPreview,
    SpaceImportPreviewItem,
    SpacePayload,
)
from .preview import (
    build_space_import_preview,
    format_space_import_preview_message,
    pick_multi_space_import_data,
)
from .schema import normalize_multi, normalize_single, parse_import_payload, parse_import_text
from .selection import parse_selection
from .share_code import decode_space_share_code, encode_space_share_code

__all__ = [
    "CURRENT_SPACE_EXPORT_SCHEMA_VERSION",
    # Errors
    "InvalidDockItemType",
    "InvalidSelectionToken",
    "InvalidShareCode",
    "InvalidSpaceExport",
    "NoSpacesSelected",
    "SelectionOutOfRange",
    "SpaceImportError",
    "SpaceStoreError",
    "UnsupportedSchemaVersion",
    # Models
    "AppItem",
    "DockItem",
    "ImportPayload",
    "MultiSpaceExportData",
    "Space",
    "SpaceExportData",
    "SpaceImportPreview",
    "SpaceImportPreviewItem",
    "SpacePayload",
    # Core operations
    "build_space_import_preview",
    "decode_space_share_code",
    "encode_space_share_code",
    "format_space_import_preview_message",
    "normalize_multi",
    "normalize_single",
    "parse_import_payload",
    "parse_import_text",
    "parse_selection",
    "pick_multi_space_import_data",
]
