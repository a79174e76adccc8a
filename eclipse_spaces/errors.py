from __future__ import annotations


class SpaceImportError(ValueError):
    """Base class for every failure raised while reading or selecting an import."""


class InvalidSpaceExport(SpaceImportError):
    pass


class InvalidDockItemType(InvalidSpaceExport):
    def __init__(self, item_type: object) -> None:
        super().__init__(f"Invalid dock item type: {item_type!r}")
        self.item_type = item_type


class InvalidShareCode(InvalidSpaceExport):
    pass


class UnsupportedSchemaVersion(SpaceImportError):
    def __init__(self, version: int, current: int) -> None:
        super().__init__(
            f"Unsupported space import schema version: {version} (current: {current})"
        )
        self.version = version
        self.current = current


class InvalidSelectionToken(SpaceImportError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid selection token: {token!r}")
        self.token = token


class SelectionOutOfRange(SpaceImportError):
    def __init__(self, number: int, available: int) -> None:
        super().__init__(f"Selection out of range: {number} (available: 1-{available})")
        self.number = number
        self.available = available


class NoSpacesSelected(SpaceImportError):
    def __init__(self, message: str = "No spaces selected") -> None:
        super().__init__(message)


class SpaceStoreError(RuntimeError):
    pass
