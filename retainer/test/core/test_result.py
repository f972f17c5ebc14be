"""Tests for retainer.core.result module."""

import pytest

from retainer.core.result import Err, Ok, Result


class TestResult:
    def test_ok_carries_value(self) -> None:
        assert Ok(42).value == 42
        assert repr(Ok(42)) == "Ok(42)"

    def test_err_carries_error(self) -> None:
        assert Err("boom").error == "boom"
        assert repr(Err("boom")) == "Err('boom')"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Ok(1).value = 2  # type: ignore[misc]

    def test_branch_on_variant(self) -> None:
        result: Result[int, str] = Err("nope")
        match result:
            case Ok(value):
                pytest.fail(f"unexpected {value}")
            case Err(error):
                assert error == "nope"
