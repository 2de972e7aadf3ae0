"""Table-driven UTF-8 validating decoder.

This module provides the UTF8D lookup table and the utf8_decode() step
function. The automaton consumes exactly one byte per call and reports one of
three kinds of state:

- UTF8_ACCEPT: a complete character has been read, ``codep`` holds it
- UTF8_REJECT: the byte is not allowed at this position
- any other value: more bytes have to be read

Overlong encodings, surrogates and codepoints above U+10FFFF are rejected by
the table itself. Once UTF8_REJECT is entered it is never left unless the
caller resets the state to UTF8_ACCEPT.

Table layout follows Bjoern Hoehrmann's "Flexible and Economical UTF-8
Decoder": https://bjoern.hoehrmann.de/utf-8/decoder/dfa/
"""

from __future__ import annotations

UTF8_ACCEPT = 0
UTF8_REJECT = 12

# fmt: off
UTF8D: tuple[int, ...] = (
    # ==========================================================================
    # BYTE CLASSES
    # Maps every byte to a character class. Classes keep the transition table
    # small and double as a mask selector for the lead byte payload.
    # ==========================================================================
    # 0x00..0x7F: ASCII
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,
    # 0x80..0xBF: continuation bytes, split by the range they may follow
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9,
    7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7,  7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7,
    # 0xC0..0xDF: two-byte leads (0xC0 and 0xC1 are always overlong)
    8, 8, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2,  2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2,
    # 0xE0..0xFF: three- and four-byte leads, 0xF5..0xFF never valid
    10, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 4, 3, 3,  11, 6, 6, 6, 5, 8, 8, 8, 8, 8, 8, 8, 8, 8, 8, 8,

    # ==========================================================================
    # TRANSITIONS
    # Indexed by state + class; states are multiples of 12.
    # ==========================================================================
    0, 12, 24, 36, 60, 96, 84, 12, 12, 12, 48, 72,  12, 12, 12, 12, 12, 12, 12, 12, 12, 12, 12, 12,
    12, 0, 12, 12, 12, 12, 12, 0, 12, 0, 12, 12,  12, 24, 12, 12, 12, 12, 12, 24, 12, 24, 12, 12,
    12, 12, 12, 12, 12, 12, 12, 24, 12, 12, 12, 12,  12, 24, 12, 12, 12, 12, 12, 12, 12, 24, 12, 12,
    12, 12, 12, 12, 12, 12, 12, 36, 12, 36, 12, 12,  12, 36, 12, 12, 12, 12, 12, 36, 12, 36, 12, 12,
    12, 36, 12, 12, 12, 12, 12, 12, 12, 12, 12, 12,
)
# fmt: on


def utf8_decode(state: int, codep: int, byte: int) -> tuple[int, int]:
    """Run a single decoding step.

    When decoding the first byte of a sequence the caller must pass
    ``state = UTF8_ACCEPT``. The returned codepoint is only meaningful once
    the returned state is UTF8_ACCEPT again.

    Args:
        state: Current automaton state.
        codep: Codepoint accumulated so far.
        byte: Next input byte (0..255).

    Returns:
        Tuple of (new state, updated codepoint).
    """
    cls = UTF8D[byte]
    if state != UTF8_ACCEPT:
        codep = (byte & 0x3F) | (codep << 6)
    else:
        codep = (0xFF >> cls) & byte
    return UTF8D[256 + state + cls], codep


def is_utf8(data: bytes | bytearray | memoryview) -> bool:
    """Return True if ``data`` is a complete, well-formed UTF-8 sequence."""
    state = UTF8_ACCEPT
    codep = 0
    for byte in bytes(data):
        state, codep = utf8_decode(state, codep, byte)
        if state == UTF8_REJECT:
            return False
    return state == UTF8_ACCEPT
