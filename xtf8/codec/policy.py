"""Error policy selection.

This module provides the Policy enum and the map_policy function for turning
user supplied values (enum members, integers, names) into a Policy.
"""

from __future__ import annotations

from enum import IntEnum


class Policy(IntEnum):
    """How a transcode call handles values it cannot represent safely."""

    REPLACE = 0
    """Substitute U+FFFD and continue."""

    ABORT = 1
    """Fail the whole call."""


# Mapping from accepted policy names to Policy members
POLICY_NAMES: dict[str, Policy] = {
    "REPLACE": Policy.REPLACE,
    "ERR_REPLACE": Policy.REPLACE,
    "ABORT": Policy.ABORT,
    "ERR_ABORT": Policy.ABORT,
}


def map_policy(value: Policy | int | str | None) -> Policy:
    """Map a policy name, integer or member to a Policy.

    Names are matched case-insensitively; ``None`` selects REPLACE.

    Args:
        value: Policy, its integer value, or its name (e.g. "replace").

    Returns:
        The matching Policy.

    Raises:
        ValueError: If the value does not name a policy.
    """
    if value is None:
        return Policy.REPLACE
    if isinstance(value, Policy):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Policy(value)
    if isinstance(value, str):
        normalized = value.strip().upper().replace("-", "_")
        if normalized in POLICY_NAMES:
            return POLICY_NAMES[normalized]
    raise ValueError(f"Unknown error policy: {value!r}")
