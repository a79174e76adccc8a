from __future__ import annotations

import base64
import binascii
import json
from typing import Union

from eclipse_spaces.constants import SHARE_CODE_PREFIX
from eclipse_spaces.errors import InvalidShareCode
from eclipse_spaces.models import ImportPayload, MultiSpaceExportData, SpaceExportData
from eclipse_spaces.schema import parse_import_payload


def encode_space_share_code(
    payload: Union[ImportPayload, SpaceExportData, MultiSpaceExportData],
) -> str:
    """Serialize a payload into a copy/paste friendly single-line code."""
    payload = parse_import_payload(payload)
    raw = json.dumps(payload.to_dict(), ensure_ascii=False, separators=(",", ":"))
    body = base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")
    return SHARE_CODE_PREFIX + body


def decode_space_share_code(code: str) -> ImportPayload:
    text = "".join(str(code or "").split())
    if text.upper().startswith(SHARE_CODE_PREFIX):
        text = text[len(SHARE_CODE_PREFIX):]
    if not text:
        raise InvalidShareCode("Empty share code")

    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
        data = json.loads(raw)
    except (binascii.Error, UnicodeError, ValueError, RecursionError) as exc:
        raise InvalidShareCode("Invalid share code") from exc
    return parse_import_payload(data)
