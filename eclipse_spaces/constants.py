APP_NAME = "eclipse_spaces"

SPACE_EXPORT_VERSION = "1.0"
SINGLE_SPACE_EXPORT_TYPE = "eclipse-space-export"
MULTI_SPACE_EXPORT_TYPE = "eclipse-multi-space-export"

# Bump together with a forward step in eclipse_spaces.schema.
CURRENT_SPACE_EXPORT_SCHEMA_VERSION = 1

ICON_TYPES = ("text", "emoji", "icon")
DEFAULT_ICON_TYPE = "text"
APP_ITEM_TYPES = ("app", "folder")

MAX_APP_ITEM_DEPTH = 32
ICON_MAX_SIZE = 192
ICON_QUALITY = 60

SHARE_CODE_PREFIX = "ECLIPSE-SPACE:"
