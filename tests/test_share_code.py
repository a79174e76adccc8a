from __future__ import annotations

import base64
import json

import pytest

from eclipse_spaces.constants import CURRENT_SPACE_EXPORT_SCHEMA_VERSION, SHARE_CODE_PREFIX
from eclipse_spaces.errors import InvalidShareCode, UnsupportedSchemaVersion
from eclipse_spaces.schema import parse_import_payload
from eclipse_spaces.share_code import decode_space_share_code, encode_space_share_code


def test_single_share_code_round_trip(single_export) -> None:
    code = encode_space_share_code(parse_import_payload(single_export("Main", schema_version=None)))
    assert code.startswith(SHARE_CODE_PREFIX)
    assert "\n" not in code

    decoded = decode_space_share_code(code)
    assert decoded.kind == "single"
    assert decoded.data.data.name == "Main"
    assert decoded.data.schema_version == CURRENT_SPACE_EXPORT_SCHEMA_VERSION


def test_multi_share_code_tolerates_whitespace_and_missing_prefix(multi_export) -> None:
    code = encode_space_share_code(parse_import_payload(multi_export(["Main", "工作"])))
    body = code[len(SHARE_CODE_PREFIX):]
    wrapped = "\n".join(body[i:i + 20] for i in range(0, len(body), 20))

    decoded = decode_space_share_code(f"  {wrapped}  ")
    assert decoded.kind == "multi"
    assert [s.name for s in decoded.spaces()] == ["Main", "工作"]


@pytest.mark.parametrize("code", ["", SHARE_CODE_PREFIX, "ECLIPSE-SPACE:@@@@", "ECLIPSE-SPACE:aGVsbG8"])
def test_garbage_share_codes_are_rejected(code: str) -> None:
    with pytest.raises(InvalidShareCode):
        decode_space_share_code(code)


def test_share_code_from_newer_schema_is_rejected(single_export) -> None:
    raw = json.dumps(single_export("Main", schema_version=CURRENT_SPACE_EXPORT_SCHEMA_VERSION + 1))
    code = SHARE_CODE_PREFIX + base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")
    with pytest.raises(UnsupportedSchemaVersion):
        decode_space_share_code(code)


def test_share_code_too_deep_to_decode_is_rejected() -> None:
    depth = 100_000
    raw = (
        '{"type":"eclipse-space-export","data":{"name":"M","apps":['
        + '{"title":"f","type":"folder","children":[' * depth
        + "]}" * depth
        + "]}}"
    )
    code = SHARE_CODE_PREFIX + base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")
    with pytest.raises(InvalidShareCode):
        decode_space_share_code(code)
