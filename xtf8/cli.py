"""Command line driver for the XTF8 codec.

Usage:
  xtf8 [-d] [-i INFILE] [-o OUTFILE] [-j] [-x] [-D] [-a | -r]

Reads all of INFILE (stdin by default), encodes it to XTF8 or decodes it
back, and writes the result to OUTFILE (stdout by default). With ``-j`` the
encoded output is JSON-escaped, or the input is JSON-unescaped before
decoding.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import BinaryIO, TextIO

from .codec import (
    decode_into,
    decode_size,
    encode_into,
    encode_size,
    json_escape,
    json_unescape,
)
from .config import CodecConfig, build_config
from .const import (
    ABORTED,
    CONF_DEBUG,
    CONF_HEXDUMP,
    CONF_INPUT,
    CONF_JSON,
    CONF_MODE,
    CONF_OUTPUT,
    CONF_POLICY,
    DOMAIN,
    ENV_POLICY,
    MODE_DECODE,
    MODE_ENCODE,
    POLICY_ABORT,
    POLICY_REPLACE,
)
from .diagnostics import describe_transcode, format_hexdump
from .exceptions import (
    ConfigError,
    XTF8CollisionError,
    XTF8Error,
    XTF8InvalidSequenceError,
)

_LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog=DOMAIN, description="XTF8 codec utility")
    ap.add_argument(
        "-d",
        dest=CONF_MODE,
        action="store_const",
        const=MODE_DECODE,
        default=MODE_ENCODE,
        help="decode mode instead of encode",
    )
    ap.add_argument("-i", dest=CONF_INPUT, metavar="INFILE", help="input file (stdin if unspecified)")
    ap.add_argument("-o", dest=CONF_OUTPUT, metavar="OUTFILE", help="output file (stdout if unspecified)")
    ap.add_argument(
        "-j",
        dest=CONF_JSON,
        action="store_true",
        help="JSON escape the output (encode mode) or unescape the input (decode mode)",
    )
    ap.add_argument("-x", dest=CONF_HEXDUMP, action="store_true", help="hexdump the output")
    ap.add_argument("-D", dest=CONF_DEBUG, action="store_true", help="show verbose debug messages")
    policy = ap.add_mutually_exclusive_group()
    policy.add_argument(
        "-a",
        dest=CONF_POLICY,
        action="store_const",
        const=POLICY_ABORT,
        help=f"abort on conflicting or invalid sequences instead of replacing them (env: {ENV_POLICY})",
    )
    policy.add_argument(
        "-r",
        dest=CONF_POLICY,
        action="store_const",
        const=POLICY_REPLACE,
        help="replace conflicting or invalid sequences with U+FFFD (default)",
    )
    ap.set_defaults(**{CONF_POLICY: os.environ.get(ENV_POLICY)})
    return ap


def _dump(stderr: TextIO, label: str, data: bytes | bytearray) -> None:
    stderr.write(f"{label}: (len={len(data)})\n")
    stderr.write(format_hexdump(data))
    stderr.flush()


def transcode(config: CodecConfig, data: bytes, stderr: TextIO | None = None) -> bytes:
    """Run the configured pipeline over ``data`` and return the output bytes.

    Raises:
        XTF8Error: On abort or a malformed JSON escape.
    """
    stderr = stderr if stderr is not None else sys.stderr

    if config.json and config.decode:
        data = json_unescape(data)
        if config.debug:
            _dump(stderr, "JSON-unescaped input", data)

    size_fn, fill_fn = (decode_size, decode_into) if config.decode else (encode_size, encode_into)
    # Sized and filled separately so -D can report the size before output.
    outlen = size_fn(data, config.policy)
    if outlen == ABORTED:
        if config.decode:
            raise XTF8InvalidSequenceError()
        raise XTF8CollisionError()
    if config.debug:
        stderr.write(
            f"XTF8 {'decoded' if config.decode else 'encoded'} size: {len(data)} -> {outlen}\n"
        )

    output = bytearray(outlen)
    fill_fn(output, data, config.policy)
    if config.debug:
        _dump(stderr, "Output", output)

    if config.json and not config.decode:
        output = bytearray(json_escape(output))
        if config.debug:
            _dump(stderr, "JSON-escaped output", output)

    _LOGGER.debug(
        "Transcode finished: %s",
        describe_transcode(config.mode, len(data), len(output), json=config.json, policy=config.policy),
    )
    return bytes(output)


def run(
    config: CodecConfig,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Read input, transcode it and write the result.

    Raises:
        OSError: If reading or writing fails.
        XTF8Error: On abort, malformed JSON escapes or empty input.
    """
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer
    stderr = stderr if stderr is not None else sys.stderr

    if config.debug:
        stderr.write(f"Mode: {config.mode}\n")
        stderr.write(f"Input: {config.input or '<stdin>'}\n")
        stderr.write(f"Output: {config.output or '<stdout>'}\n")
        json_desc = ("unescape input" if config.decode else "escape output") if config.json else "(none)"
        stderr.write(f"JSON: {json_desc}\n")

    if config.input is not None:
        with open(config.input, "rb") as fp:
            data = fp.read()
    else:
        data = stdin.read()
    if not data:
        raise XTF8Error(f"failed to read from: {config.input or 'stdin'}")
    if config.debug:
        _dump(stderr, "Input", data)

    output = transcode(config, data, stderr)
    if config.hexdump:
        output = format_hexdump(output).encode("ascii")

    if config.output is not None:
        with open(config.output, "wb") as fp:
            fp.write(output)
    else:
        stdout.write(output)
        stdout.flush()
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(logging.DEBUG if args.debug else logging.WARNING)

    try:
        config = build_config(vars(args))
    except ConfigError as err:
        parser.error(str(err))

    try:
        return run(config)
    except (XTF8Error, OSError) as err:
        print(f"{DOMAIN}: error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
