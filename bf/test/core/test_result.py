"""Tests for bf.core.result module."""

import pytest

from bf.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    """Tests for Ok type."""

    def test_ok_is_ok(self) -> None:
        result = Ok(42)
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_ok_unwrap(self) -> None:
        assert Ok("sha").unwrap() == "sha"

    def test_ok_repr(self) -> None:
        assert repr(Ok(42)) == "Ok(42)"

    def test_ok_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]


class TestErr:
    """Tests for Err type."""

    def test_err_is_err(self) -> None:
        result = Err("boom")
        assert result.is_err() is True
        assert result.is_ok() is False

    def test_err_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err: boom"):
            Err("boom").unwrap()

    def test_err_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


class TestTypeGuards:
    def test_is_ok(self) -> None:
        result: Result[int, str] = Ok(1)
        assert is_ok(result)
        assert not is_err(result)

    def test_is_err(self) -> None:
        result: Result[int, str] = Err("x")
        assert is_err(result)
        assert not is_ok(result)

    def test_pattern_matching(self) -> None:
        def describe(result: Result[int, str]) -> str:
            match result:
                case Ok(value):
                    return f"value {value}"
                case Err(error):
                    return f"error {error}"

        assert describe(Ok(3)) == "value 3"
        assert describe(Err("bad")) == "error bad"
