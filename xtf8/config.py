"""Configuration for XTF8 transcode runs."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import voluptuous as vol

from .codec.policy import Policy, map_policy
from .const import (
    CONF_DEBUG,
    CONF_HEXDUMP,
    CONF_INPUT,
    CONF_JSON,
    CONF_MODE,
    CONF_OUTPUT,
    CONF_POLICY,
    DEFAULT_DEBUG,
    DEFAULT_HEXDUMP,
    DEFAULT_JSON,
    DEFAULT_MODE,
    DEFAULT_POLICY,
    MODE_DECODE,
    MODES,
)
from .exceptions import ConfigError

_LOGGER = logging.getLogger(__name__)


def _coerce_policy(value: Any) -> Policy:
    """Voluptuous validator wrapping map_policy."""
    try:
        return map_policy(value)
    except ValueError as err:
        raise vol.Invalid(str(err)) from err


def _optional_path(value: Any) -> str | None:
    if value is None or value == "-":
        return None
    return vol.Length(min=1)(str(value))


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_MODE, default=DEFAULT_MODE): vol.All(vol.Lower, vol.In(MODES)),
        vol.Optional(CONF_POLICY, default=DEFAULT_POLICY): _coerce_policy,
        vol.Optional(CONF_JSON, default=DEFAULT_JSON): vol.Boolean(),
        vol.Optional(CONF_HEXDUMP, default=DEFAULT_HEXDUMP): vol.Boolean(),
        vol.Optional(CONF_DEBUG, default=DEFAULT_DEBUG): vol.Boolean(),
        vol.Optional(CONF_INPUT, default=None): _optional_path,
        vol.Optional(CONF_OUTPUT, default=None): _optional_path,
    }
)


@dataclass
class CodecConfig:
    """Settings for one transcode run.

    ``input``/``output`` of None mean stdin/stdout.
    """

    mode: str = DEFAULT_MODE
    policy: Policy = Policy.REPLACE
    json: bool = DEFAULT_JSON
    hexdump: bool = DEFAULT_HEXDUMP
    debug: bool = DEFAULT_DEBUG
    input: str | None = None
    output: str | None = None

    @property
    def decode(self) -> bool:
        """Return True when running in decode mode."""
        return self.mode == MODE_DECODE


def build_config(options: dict[str, Any]) -> CodecConfig:
    """Validate an options mapping and build a CodecConfig.

    Keys whose value is None are treated as unset so their defaults apply.

    Raises:
        ConfigError: If any option is invalid.
    """
    cleaned = {key: value for key, value in options.items() if value is not None}
    try:
        data = CONFIG_SCHEMA(cleaned)
    except vol.Invalid as err:
        raise ConfigError(f"invalid configuration: {err}") from err
    _LOGGER.debug("Using configuration: %s", data)
    return CodecConfig(**data)
