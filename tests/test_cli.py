"""Tests for the xtf8 command line driver."""

import io
from pathlib import Path

import pytest

from xtf8.cli import main, run, transcode
from xtf8.config import build_config
from xtf8.exceptions import XTF8CollisionError, XTF8Error, XTF8InvalidSequenceError

# U+EF80 inside the input collides with the reserved block
COLLIDING = b"\xee\xbe\x80"


def _files(tmp_path: Path, data: bytes) -> tuple[Path, Path]:
    infile = tmp_path / "in.bin"
    infile.write_bytes(data)
    return infile, tmp_path / "out.bin"


class TestTranscode:
    """Pipeline without any I/O."""

    def test_encode(self) -> None:
        assert transcode(build_config({}), b"\xff\x41") == b"\xee\xbf\xbf\x41"

    def test_decode(self) -> None:
        cfg = build_config({"mode": "decode"})
        assert transcode(cfg, b"\xee\xbf\xbf\x41") == b"\xff\x41"

    def test_encode_json(self) -> None:
        cfg = build_config({"json": True})
        assert transcode(cfg, b'\xff"\n') == b'\xee\xbf\xbf\\"\\n'

    def test_decode_json(self) -> None:
        cfg = build_config({"mode": "decode", "json": True})
        assert transcode(cfg, b'\xee\xbf\xbf\\"\\n') == b'\xff"\n'

    def test_abort_on_collision(self) -> None:
        with pytest.raises(XTF8CollisionError):
            transcode(build_config({"policy": "abort"}), COLLIDING)

    def test_abort_on_invalid_input(self) -> None:
        with pytest.raises(XTF8InvalidSequenceError):
            transcode(build_config({"mode": "decode", "policy": "abort"}), b"\xff")

    def test_debug_writes_stages(self) -> None:
        err = io.StringIO()
        cfg = build_config({"json": True, "debug": True})
        transcode(cfg, b"\xff", err)
        text = err.getvalue()
        assert "XTF8 encoded size: 1 -> 3" in text
        assert "Output: (len=3)" in text
        assert "JSON-escaped output: (len=3)" in text


class TestRun:
    """Tests for run with in-memory streams."""

    def test_stdin_to_stdout(self) -> None:
        out = io.BytesIO()
        assert run(build_config({}), stdin=io.BytesIO(b"\x80"), stdout=out) == 0
        assert out.getvalue() == b"\xee\xbe\x80"

    def test_empty_input_is_error(self) -> None:
        with pytest.raises(XTF8Error, match="stdin"):
            run(build_config({}), stdin=io.BytesIO(b""), stdout=io.BytesIO())

    def test_hexdump_output(self) -> None:
        out = io.BytesIO()
        run(build_config({"hexdump": True}), stdin=io.BytesIO(b"A"), stdout=out)
        assert out.getvalue().decode("ascii").splitlines()[-1] == "00000001"

    def test_debug_header(self) -> None:
        err = io.StringIO()
        cfg = build_config({"mode": "decode", "json": True, "debug": True})
        run(cfg, stdin=io.BytesIO(b"abc"), stdout=io.BytesIO(), stderr=err)
        text = err.getvalue()
        assert "Mode: decode" in text
        assert "Input: <stdin>" in text
        assert "Output: <stdout>" in text
        assert "JSON: unescape input" in text
        assert "Input: (len=3)" in text


class TestMain:
    """Tests for main."""

    def test_encode_decode_files(self, tmp_path: Path) -> None:
        original = b"\x00binary\xff\xfe" + "text é".encode()
        infile, encoded = _files(tmp_path, original)
        decoded = tmp_path / "decoded.bin"

        assert main(["-i", str(infile), "-o", str(encoded)]) == 0
        assert encoded.read_bytes().decode("utf-8")
        assert main(["-d", "-i", str(encoded), "-o", str(decoded)]) == 0
        assert decoded.read_bytes() == original

    def test_json_round_trip(self, tmp_path: Path) -> None:
        original = b'\x01"\\\xc0'
        infile, encoded = _files(tmp_path, original)
        decoded = tmp_path / "decoded.bin"

        assert main(["-j", "-i", str(infile), "-o", str(encoded)]) == 0
        assert b"\\u0001" in encoded.read_bytes()
        assert main(["-d", "-j", "-i", str(encoded), "-o", str(decoded)]) == 0
        assert decoded.read_bytes() == original

    def test_abort_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        infile, outfile = _files(tmp_path, COLLIDING)
        assert main(["-a", "-i", str(infile), "-o", str(outfile)]) == 1
        assert "xtf8: error:" in capsys.readouterr().err
        assert not outfile.exists()

    def test_replace_by_default(self, tmp_path: Path) -> None:
        infile, outfile = _files(tmp_path, COLLIDING)
        assert main(["-i", str(infile), "-o", str(outfile)]) == 0
        assert outfile.read_bytes() == b"\xef\xbf\xbd"

    def test_policy_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("XTF8_POLICY", "abort")
        infile, outfile = _files(tmp_path, COLLIDING)
        assert main(["-i", str(infile), "-o", str(outfile)]) == 1
        assert "conflicting" in capsys.readouterr().err

    def test_replace_flag_overrides_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XTF8_POLICY", "abort")
        infile, outfile = _files(tmp_path, COLLIDING)
        assert main(["-r", "-i", str(infile), "-o", str(outfile)]) == 0
        assert outfile.read_bytes() == b"\xef\xbf\xbd"

    def test_abort_and_replace_are_exclusive(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["-a", "-r"])
        assert exc_info.value.code == 2

    def test_debug_logs_configuration(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        infile, outfile = _files(tmp_path, b"abc")
        assert main(["-D", "-i", str(infile), "-o", str(outfile)]) == 0
        assert "Using configuration" in caplog.text

    def test_invalid_policy_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XTF8_POLICY", "bogus")
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_malformed_json_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        infile, outfile = _files(tmp_path, b"abc\\q")
        assert main(["-d", "-j", "-i", str(infile), "-o", str(outfile)]) == 1
        assert "invalid escape sequence" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-i", str(tmp_path / "missing.bin")]) == 1
        assert "xtf8: error:" in capsys.readouterr().err

    def test_extra_arguments(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["unexpected"])
        assert exc_info.value.code == 2

    def test_hexdump_to_file(self, tmp_path: Path) -> None:
        infile, outfile = _files(tmp_path, b"\xff")
        assert main(["-x", "-i", str(infile), "-o", str(outfile)]) == 0
        assert outfile.read_text().startswith("00000000  ee bf bf ")
