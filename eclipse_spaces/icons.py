from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import replace
from typing import Callable, List, Optional

from PySide6 import QtCore, QtGui

from eclipse_spaces.constants import APP_NAME, ICON_MAX_SIZE, ICON_QUALITY
from eclipse_spaces.models import DockItem

LOGGER = logging.getLogger(APP_NAME)

IconCompressor = Callable[[str], str]

# Tried in order; the WebP writer is a Qt plugin and may be missing.
_OUTPUT_FORMATS = (("WEBP", "image/webp"), ("PNG", "image/png"))


def _decode_data_url(source: str) -> Optional[bytes]:
    header, sep, body = source.partition(",")
    if not sep or ";base64" not in header:
        return None
    try:
        return base64.b64decode(body, validate=False)
    except (binascii.Error, ValueError):
        return None


def _encode(image: QtGui.QImage, fmt: str, quality: int) -> Optional[bytes]:
    data = QtCore.QByteArray()
    buf = QtCore.QBuffer(data)
    if not buf.open(QtCore.QIODevice.WriteOnly):
        return None
    try:
        ok = image.save(buf, fmt, quality)
    finally:
        buf.close()
    return bytes(data.data()) if ok else None


def compress_icon(source: str, max_size: int = ICON_MAX_SIZE, quality: int = ICON_QUALITY) -> str:
    """Shrink a ``data:image`` icon to fit ``max_size`` square.

    Remote URLs and anything Qt cannot decode are returned untouched, as is the
    original when the re-encoded icon would be larger.
    """
    if not source or not source.startswith("data:image"):
        return source
    raw = _decode_data_url(source)
    if not raw:
        return source

    image = QtGui.QImage()
    if not image.loadFromData(raw):
        LOGGER.debug("icon compression skipped: undecodable image (%d bytes)", len(raw))
        return source
    if image.width() > max_size or image.height() > max_size:
        image = image.scaled(
            max_size,
            max_size,
            QtCore.Qt.KeepAspectRatio,
            QtCore.Qt.SmoothTransformation,
        )

    for fmt, mime in _OUTPUT_FORMATS:
        encoded = _encode(image, fmt, quality)
        if encoded is None:
            continue
        out = f"data:{mime};base64,{base64.b64encode(encoded).decode('ascii')}"
        return out if len(out) < len(source) else source
    return source


def compress_icons_in_items(items: List[DockItem], compress: IconCompressor) -> List[DockItem]:
    """Return copies of ``items`` with every icon passed through ``compress``."""
    out: List[DockItem] = []
    for item in items:
        nested = compress_icons_in_items(item.items, compress) if item.items is not None else None
        out.append(replace(item, icon=compress(item.icon) if item.icon else item.icon, items=nested))
    return out
