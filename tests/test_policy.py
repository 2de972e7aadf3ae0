"""Tests for error policy mapping."""

import pytest

import xtf8
from xtf8.codec.policy import Policy, map_policy


class TestMapPolicy:
    """Tests for map_policy."""

    def test_none_is_replace(self) -> None:
        assert map_policy(None) is Policy.REPLACE

    def test_member_passthrough(self) -> None:
        assert map_policy(Policy.ABORT) is Policy.ABORT

    def test_int_values(self) -> None:
        assert map_policy(0) is Policy.REPLACE
        assert map_policy(1) is Policy.ABORT

    def test_names_case_insensitive(self) -> None:
        assert map_policy("replace") is Policy.REPLACE
        assert map_policy("ABORT") is Policy.ABORT
        assert map_policy(" Abort ") is Policy.ABORT

    def test_err_prefixed_names(self) -> None:
        assert map_policy("err_abort") is Policy.ABORT
        assert map_policy("ERR-REPLACE") is Policy.REPLACE

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            map_policy("ignore")

    def test_unknown_int(self) -> None:
        with pytest.raises(ValueError):
            map_policy(7)

    def test_bool_rejected(self) -> None:
        with pytest.raises(ValueError):
            map_policy(True)  # type: ignore[arg-type]


class TestExports:
    """Package level policy constants."""

    def test_err_constants(self) -> None:
        assert xtf8.ERR_REPLACE is Policy.REPLACE
        assert xtf8.ERR_ABORT is Policy.ABORT

    def test_default_policy_is_replace(self) -> None:
        assert xtf8.encode(b"\xee\xbe\x80") == b"\xef\xbf\xbd"
