"""XTF8 transcoding between arbitrary bytes and well-formed UTF-8.

This module provides the encoder and decoder. Both walk the input through the
UTF-8 automaton in xtf8.codec.utf8 and share the same shape:

- ``*_size(src, policy)`` performs the walk without writing and returns the
  exact output length, or ABORTED.
- ``*_into(dst, src, policy)`` performs the identical walk writing into a
  caller supplied writable buffer and returns the number of bytes written,
  or ABORTED.
- ``encode()`` / ``decode()`` size, allocate once, fill, and return bytes.
  They raise an XTF8AbortError subclass instead of returning ABORTED.

Encoding Strategy:
------------------
Valid UTF-8 sequences are copied verbatim. Every byte of an invalid run is
transliterated to U+EF80 | (byte & 0x7F) within the reserved Private Use Area
block, which always takes 3 bytes. A valid sequence that already decodes into
the reserved block would be ambiguous; it is replaced with U+FFFD under
Policy.REPLACE, or fails the call under Policy.ABORT.

When a sequence is rejected on a byte that is not a lead byte, the cursor
steps back one byte so that byte is classified again as the start of a new
sequence. A sequence still pending at the end of the input is handled as if
it had been rejected there.
"""

from __future__ import annotations

import logging

from ..const import ABORTED, PUA_END, PUA_START, REPLACEMENT_CHAR, REPLACEMENT_UTF8
from ..exceptions import XTF8CollisionError, XTF8InvalidSequenceError
from .policy import Policy, map_policy
from .utf8 import UTF8_ACCEPT, UTF8_REJECT, utf8_decode

_LOGGER = logging.getLogger(__name__)

BytesLike = bytes | bytearray | memoryview


def _utf8_3(codep: int) -> bytes:
    """Return the 3-byte UTF-8 form of a BMP codepoint."""
    return bytes(
        (
            (codep >> 12 & 0x0F) | 0xE0,
            (codep >> 6 & 0x3F) | 0x80,
            (codep & 0x3F) | 0x80,
        )
    )


# UTF-8 forms of U+EF80..U+EFFF, indexed by the low 7 bits of the raw byte
_PUA_UTF8: tuple[bytes, ...] = tuple(_utf8_3(PUA_START | low) for low in range(0x80))

_SINGLE_BYTES: tuple[bytes, ...] = tuple(bytes((value,)) for value in range(0x100))


def _as_view(src: BytesLike) -> bytes | bytearray | memoryview:
    """Return an indexable byte view of ``src`` without copying."""
    if isinstance(src, (bytes, bytearray)):
        return src
    try:
        view = memoryview(src)
    except TypeError:
        raise TypeError(
            f"expected a bytes-like object, got {type(src).__name__}"
        ) from None
    if not view.c_contiguous:
        return view.tobytes()
    return view.cast("B")


def _as_output(dst: bytearray | memoryview) -> memoryview:
    """Return a writable byte view of ``dst``."""
    view = memoryview(dst).cast("B")
    if view.readonly:
        raise TypeError("output buffer must be writable")
    return view


def _emit(out: memoryview | None, offset: int, chunk: BytesLike) -> int:
    """Write ``chunk`` at ``offset`` (when writing) and return the new offset."""
    end = offset + len(chunk)
    if out is not None:
        if end > len(out):
            raise ValueError(
                f"output buffer too small: need more than {len(out)} bytes"
            )
        out[offset:end] = chunk
    return end


def _transliterate(
    out: memoryview | None,
    offset: int,
    data: BytesLike,
    start: int,
    stop: int,
    debug: bool,
) -> int:
    """Transliterate ``data[start:stop]`` byte by byte into the reserved block."""
    for index in range(start, stop):
        byte = data[index]
        if debug:
            _LOGGER.debug("Encoded 0x%02x -> U+%04X", byte, PUA_START | (byte & 0x7F))
        offset = _emit(out, offset, _PUA_UTF8[byte & 0x7F])
    return offset


def _encode(out: memoryview | None, data: BytesLike, policy: Policy) -> int:
    debug = _LOGGER.isEnabledFor(logging.DEBUG)
    s_prev = s_cur = UTF8_ACCEPT
    codep = 0
    pos = cursor = 0
    end = len(data)
    size = 0

    while cursor < end:
        s_cur, codep = utf8_decode(s_cur, codep, data[cursor])

        if s_cur == UTF8_ACCEPT:
            if PUA_START <= codep <= PUA_END:
                if policy == Policy.ABORT:
                    _LOGGER.debug("Collision U+%04X at offset %d, aborting", codep, pos)
                    return ABORTED
                if debug:
                    _LOGGER.debug("Replaced U+%04X at offset %d -> U+%04X", codep, pos, REPLACEMENT_CHAR)
                size = _emit(out, size, REPLACEMENT_UTF8)
            else:
                size = _emit(out, size, data[pos : cursor + 1])
            pos = cursor + 1

        elif s_cur == UTF8_REJECT:
            s_cur = UTF8_ACCEPT
            if s_prev != UTF8_ACCEPT:
                cursor -= 1  # retry with this byte as the beginning
            size = _transliterate(out, size, data, pos, cursor + 1, debug)
            pos = cursor + 1

        s_prev = s_cur
        cursor += 1

    if pos < end:
        if debug:
            _LOGGER.debug("Truncated sequence at offset %d", pos)
        size = _transliterate(out, size, data, pos, end, debug)

    return size


def _decode(out: memoryview | None, data: BytesLike, policy: Policy) -> int:
    debug = _LOGGER.isEnabledFor(logging.DEBUG)
    s_prev = s_cur = UTF8_ACCEPT
    codep = 0
    pos = cursor = 0
    end = len(data)
    size = 0

    while cursor < end:
        s_cur, codep = utf8_decode(s_cur, codep, data[cursor])

        if s_cur == UTF8_ACCEPT:
            if PUA_START <= codep <= PUA_END:
                # Markers only ever carry non-ASCII bytes.
                value = (codep & 0x7F) | 0x80
                if debug:
                    _LOGGER.debug("Decoded U+%04X -> 0x%02x", codep, value)
                size = _emit(out, size, _SINGLE_BYTES[value])
            else:
                size = _emit(out, size, data[pos : cursor + 1])
            pos = cursor + 1

        elif s_cur == UTF8_REJECT:
            if policy == Policy.ABORT:
                _LOGGER.debug("Invalid sequence at offset %d, aborting", pos)
                return ABORTED
            s_cur = UTF8_ACCEPT
            if s_prev != UTF8_ACCEPT:
                cursor -= 1  # retry with this byte as the beginning
            if debug:
                _LOGGER.debug("Replaced invalid sequence at offset %d -> U+%04X", pos, REPLACEMENT_CHAR)
            size = _emit(out, size, REPLACEMENT_UTF8)
            pos = cursor + 1

        s_prev = s_cur
        cursor += 1

    if pos < end:
        if policy == Policy.ABORT:
            _LOGGER.debug("Truncated sequence at offset %d, aborting", pos)
            return ABORTED
        if debug:
            _LOGGER.debug("Replaced truncated sequence at offset %d -> U+%04X", pos, REPLACEMENT_CHAR)
        size = _emit(out, size, REPLACEMENT_UTF8)

    return size


def encode_size(src: BytesLike, policy: Policy | int | str | None = Policy.REPLACE) -> int:
    """Return the XTF8-encoded length of ``src``.

    Args:
        src: Raw bytes to encode.
        policy: Handling of reserved-block collisions.

    Returns:
        Required output length, or ABORTED if a collision was found under
        Policy.ABORT.
    """
    return _encode(None, _as_view(src), map_policy(policy))


def encode_into(
    dst: bytearray | memoryview,
    src: BytesLike,
    policy: Policy | int | str | None = Policy.REPLACE,
) -> int:
    """Encode ``src`` into the writable buffer ``dst``.

    ``dst`` should be sized with encode_size() for the same ``src`` and
    ``policy``. On ABORTED the contents of ``dst`` are unspecified.

    Returns:
        Number of bytes written, or ABORTED.

    Raises:
        ValueError: If ``dst`` is too small.
    """
    return _encode(_as_output(dst), _as_view(src), map_policy(policy))


def encode(src: BytesLike, policy: Policy | int | str | None = Policy.REPLACE) -> bytes:
    """Encode arbitrary bytes to XTF8.

    Args:
        src: Raw bytes to encode.
        policy: Handling of reserved-block collisions.

    Returns:
        Well-formed UTF-8 bytes.

    Raises:
        XTF8CollisionError: If a collision was found under Policy.ABORT.
    """
    data = _as_view(src)
    policy = map_policy(policy)
    size = _encode(None, data, policy)
    if size == ABORTED:
        raise XTF8CollisionError()
    buf = bytearray(size)
    _encode(memoryview(buf), data, policy)
    _LOGGER.debug("Encoded %d -> %d bytes", len(data), size)
    return bytes(buf)


def decode_size(src: BytesLike, policy: Policy | int | str | None = Policy.REPLACE) -> int:
    """Return the decoded length of the XTF8 data in ``src``, or ABORTED."""
    return _decode(None, _as_view(src), map_policy(policy))


def decode_into(
    dst: bytearray | memoryview,
    src: BytesLike,
    policy: Policy | int | str | None = Policy.REPLACE,
) -> int:
    """Decode ``src`` into the writable buffer ``dst``.

    Returns:
        Number of bytes written, or ABORTED.

    Raises:
        ValueError: If ``dst`` is too small.
    """
    return _decode(_as_output(dst), _as_view(src), map_policy(policy))


def decode(src: BytesLike, policy: Policy | int | str | None = Policy.REPLACE) -> bytes:
    """Decode XTF8 data back to the original bytes.

    Args:
        src: XTF8-encoded bytes.
        policy: Handling of invalid UTF-8 in ``src``.

    Returns:
        The original bytes.

    Raises:
        XTF8InvalidSequenceError: If ``src`` is not valid UTF-8 under
            Policy.ABORT.
    """
    data = _as_view(src)
    policy = map_policy(policy)
    size = _decode(None, data, policy)
    if size == ABORTED:
        raise XTF8InvalidSequenceError()
    buf = bytearray(size)
    _decode(memoryview(buf), data, policy)
    _LOGGER.debug("Decoded %d -> %d bytes", len(data), size)
    return bytes(buf)
