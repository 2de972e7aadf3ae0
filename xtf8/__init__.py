"""XTF8: byte-safe transcoding of arbitrary data to well-formed UTF-8.

Valid UTF-8 passes through unchanged. Each byte of an invalid sequence is
carried as one codepoint of the Private Use Area block U+EF80..U+EFFF, so the
result is always valid UTF-8 and decodes back to the original bytes.

Usage:
    import xtf8

    encoded = xtf8.encode(data)
    assert xtf8.decode(encoded) == data
"""

from __future__ import annotations

from .codec import (
    Policy,
    decode,
    decode_into,
    decode_size,
    encode,
    encode_into,
    encode_size,
    is_utf8,
    json_escape,
    json_escape_size,
    json_unescape,
    json_unescape_size,
    map_policy,
    utf8_decode,
)
from .const import ABORTED, PUA_END, PUA_START
from .diagnostics import format_hexdump, hexdump
from .exceptions import (
    ConfigError,
    JsonUnescapeError,
    XTF8AbortError,
    XTF8CollisionError,
    XTF8Error,
    XTF8InvalidSequenceError,
)

# Named policy values, mirroring the ERR_* constants of other bindings
ERR_REPLACE = Policy.REPLACE
ERR_ABORT = Policy.ABORT

__version__ = "0.1.0"

__all__ = [
    "ABORTED",
    "ERR_ABORT",
    "ERR_REPLACE",
    "PUA_END",
    "PUA_START",
    "ConfigError",
    "JsonUnescapeError",
    "Policy",
    "XTF8AbortError",
    "XTF8CollisionError",
    "XTF8Error",
    "XTF8InvalidSequenceError",
    "decode",
    "decode_into",
    "decode_size",
    "encode",
    "encode_into",
    "encode_size",
    "format_hexdump",
    "hexdump",
    "is_utf8",
    "json_escape",
    "json_escape_size",
    "json_unescape",
    "json_unescape_size",
    "map_policy",
    "utf8_decode",
]
