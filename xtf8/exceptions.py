"""Exceptions raised by the XTF8 codec."""

from __future__ import annotations


class XTF8Error(Exception):
    """Base class for all XTF8 errors."""


class XTF8AbortError(XTF8Error):
    """A transcode call was aborted under the ABORT policy."""


class XTF8CollisionError(XTF8AbortError):
    """Input contains a codepoint from the reserved block."""

    def __init__(self, message: str = "found conflicting character in reserved block") -> None:
        super().__init__(message)


class XTF8InvalidSequenceError(XTF8AbortError):
    """Input to the decoder is not valid UTF-8."""

    def __init__(self, message: str = "found invalid sequence") -> None:
        super().__init__(message)


class JsonUnescapeError(XTF8Error, ValueError):
    """Malformed JSON string escape sequence."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position


class ConfigError(XTF8Error):
    """Invalid codec configuration."""
