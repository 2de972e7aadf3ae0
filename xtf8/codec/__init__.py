"""XTF8 codec: byte-safe transcoding to and from well-formed UTF-8.

Components, leaf first:

1. utf8: table-driven UTF-8 validating decoder, one byte per step.
2. transcoding: the encoder, which copies valid UTF-8 and transliterates
   invalid bytes into U+EF80..U+EFFF, and the decoder, which reverses it.
3. json_escape: JSON string escaping applied on top of encoded output.
"""

from __future__ import annotations

from .json_escape import (
    json_escape,
    json_escape_size,
    json_unescape,
    json_unescape_size,
)
from .policy import Policy, map_policy
from .transcoding import (
    decode,
    decode_into,
    decode_size,
    encode,
    encode_into,
    encode_size,
)
from .utf8 import UTF8_ACCEPT, UTF8_REJECT, is_utf8, utf8_decode

__all__ = [
    "UTF8_ACCEPT",
    "UTF8_REJECT",
    "Policy",
    "decode",
    "decode_into",
    "decode_size",
    "encode",
    "encode_into",
    "encode_size",
    "is_utf8",
    "json_escape",
    "json_escape_size",
    "json_unescape",
    "json_unescape_size",
    "map_policy",
    "utf8_decode",
]
