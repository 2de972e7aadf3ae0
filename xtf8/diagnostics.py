"""Diagnostic output for transcode runs."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from .const import HEXDUMP_WIDTH


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte < 0x7F else "."


def format_hexdump(data: bytes | bytearray | memoryview) -> str:
    """Format ``data`` the same way as ``hexdump -C``.

    Each line holds the 8-digit offset, up to 16 bytes in hex with an extra
    space after the eighth, and the printable text between bars. A final line
    holds the total length.
    """
    data = bytes(data)
    lines: list[str] = []
    for off in range(0, len(data), HEXDUMP_WIDTH):
        chunk = data[off : off + HEXDUMP_WIDTH]
        hex_part = "".join(
            f"{byte:02x} " + (" " if i == 7 else "") for i, byte in enumerate(chunk)
        )
        text = "".join(_printable(byte) for byte in chunk)
        lines.append(f"{off:08x}  {hex_part:<49.49} |{text}|")
    lines.append(f"{len(data):08x}")
    return "\n".join(lines) + "\n"


def hexdump(data: bytes | bytearray | memoryview, fp: TextIO | None = None) -> None:
    """Write a ``hexdump -C`` style dump of ``data`` to ``fp`` (stdout by default)."""
    fp = fp if fp is not None else sys.stdout
    fp.write(format_hexdump(data))
    fp.flush()


def describe_transcode(
    mode: str, input_len: int, output_len: int, *, json: bool, policy: Any
) -> dict[str, Any]:
    """Return diagnostic information about a finished transcode run."""
    return {
        "mode": mode,
        "policy": getattr(policy, "name", str(policy)).lower(),
        "json": json,
        "input_len": input_len,
        "output_len": output_len,
        "ratio": round(output_len / input_len, 3) if input_len else None,
    }
