"""JSON string escaping for XTF8 payloads.

The escaper produces content that can be placed between the quotes of a JSON
string literal (RFC 8259, Section 7). Only what JSON requires is escaped:
control characters, reverse solidus and quotation mark. Multi-byte UTF-8
sequences pass through unchanged.

The unescaper is the exact inverse and deliberately narrow: it only accepts
the escapes the escaper can produce, with ``\\u`` limited to 0x00..0x1F.
Anything else raises JsonUnescapeError; there is no replacement mode.
"""

from __future__ import annotations

import logging

from ..exceptions import JsonUnescapeError
from .transcoding import BytesLike, _as_view

_LOGGER = logging.getLogger(__name__)

_BACKSLASH = 0x5C
_QUOTE = 0x22
_LETTER_U = 0x75

# Control characters with a two-character mnemonic escape
SHORT_ESCAPES: dict[int, bytes] = {
    0x0A: b"\\n",
    0x0D: b"\\r",
    0x09: b"\\t",
    0x08: b"\\b",
    0x0C: b"\\f",
}

# Escape letter -> raw byte
UNESCAPES: dict[int, int] = {
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    _BACKSLASH: _BACKSLASH,
    _QUOTE: _QUOTE,
}

_HEX_DIGITS = b"0123456789ABCDEF"
_HEX_VALUES: dict[int, int] = {
    **{ch: value for value, ch in enumerate(_HEX_DIGITS)},
    **{ch: value for value, ch in enumerate(b"abcdef", start=10)},
}

# Largest value accepted in a \u00XX escape
MAX_UNICODE_ESCAPE = 0x1F


def _escape_byte(ch: int) -> bytes:
    if ch <= 0x1F:
        short = SHORT_ESCAPES.get(ch)
        if short is not None:
            return short
        return b"\\u00" + bytes((_HEX_DIGITS[ch >> 4], _HEX_DIGITS[ch & 0x0F]))
    if ch in (_BACKSLASH, _QUOTE):
        return bytes((_BACKSLASH, ch))
    return bytes((ch,))


# Escaped form of every byte value
_ESCAPED: tuple[bytes, ...] = tuple(_escape_byte(ch) for ch in range(0x100))


def json_escape_size(src: BytesLike) -> int:
    """Return the length of the JSON-escaped form of ``src``."""
    return sum(len(_ESCAPED[ch]) for ch in _as_view(src))


def json_escape(src: BytesLike) -> bytes:
    """Escape ``src`` for use inside a JSON string literal.

    The surrounding quotes are not added.

    Args:
        src: UTF-8 bytes, typically the output of xtf8.encode().

    Returns:
        Escaped bytes.
    """
    return b"".join(_ESCAPED[ch] for ch in _as_view(src))


def _unescape(out: bytearray | None, data: BytesLike) -> int:
    size = 0
    escape = False
    end = len(data)
    index = 0

    while index < end:
        ch = data[index]
        if escape:
            if ch == _LETTER_U:
                # u00XX
                if index + 4 >= end:
                    raise JsonUnescapeError("truncated \\u00XX sequence", index - 1)
                value = 0
                for digit in data[index + 1 : index + 5]:
                    nibble = _HEX_VALUES.get(digit)
                    if nibble is None:
                        raise JsonUnescapeError(
                            "invalid hex digit in \\u00XX sequence", index - 1
                        )
                    value = (value << 4) | nibble
                if value > MAX_UNICODE_ESCAPE:
                    raise JsonUnescapeError(
                        f"out-of-range \\u{value:04X} sequence", index - 1
                    )
                _LOGGER.debug("Unescaped \\u%04X to 0x%02X", value, value)
                index += 4
            elif ch in UNESCAPES:
                value = UNESCAPES[ch]
            else:
                raise JsonUnescapeError(f"invalid escape sequence \\{chr(ch)}", index - 1)

            size += 1
            if out is not None:
                out.append(value)
            escape = False

        elif ch == _BACKSLASH:
            escape = True

        else:
            size += 1
            if out is not None:
                out.append(ch)

        index += 1

    if escape:
        raise JsonUnescapeError("incomplete escape sequence", end - 1)

    return size


def json_unescape_size(src: BytesLike) -> int:
    """Return the length of the unescaped form of ``src``.

    Raises:
        JsonUnescapeError: If ``src`` contains a malformed escape.
    """
    return _unescape(None, _as_view(src))


def json_unescape(src: BytesLike) -> bytes:
    """Reverse json_escape().

    Args:
        src: JSON string content without the surrounding quotes.

    Returns:
        The unescaped bytes.

    Raises:
        JsonUnescapeError: On an unknown escape letter, a truncated or
            malformed ``\\u`` escape, a ``\\u`` value above 0x1F, or a
            dangling trailing backslash.
    """
    out = bytearray()
    _unescape(out, _as_view(src))
    return bytes(out)
