"""Tests for the result protocol."""

from __future__ import annotations

import dataclasses

import pytest

from litestar_saga.core.result import Error, Success, error_result, is_result, success_result
from litestar_saga.exceptions import ResultUnwrapError


@pytest.mark.unit
class TestResultConstruction:
    """Tests for success_result and error_result."""

    def test_success_result_discriminants(self) -> None:
        """Test success results are ok and not err."""
        result = success_result({"id": 1})

        assert isinstance(result, Success)
        assert result.is_ok is True
        assert result.is_err is False
        assert result.status == "success"
        assert result.data == {"id": 1}

    def test_error_result_discriminants(self) -> None:
        """Test error results are err and not ok."""
        result = error_result("boom")

        assert isinstance(result, Error)
        assert result.is_ok is False
        assert result.is_err is True
        assert result.status == "error"
        assert result.error == "boom"

    @pytest.mark.parametrize("value", ["", 0, None, False, []])
    def test_falsy_error_values_are_still_errors(self, value: object) -> None:
        """Test falsy error payloads do not change the discriminants."""
        result = error_result(value)

        assert result.is_err is True
        assert result.is_ok is False
        assert result.error == value

    def test_results_are_frozen(self) -> None:
        """Test results cannot be mutated after construction."""
        result = success_result(1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.data = 2  # type: ignore[misc]

    def test_pattern_matching(self) -> None:
        """Test results can be destructured with match."""
        match error_result("boom"):
            case Success(data=data):
                pytest.fail(f"unexpected success {data!r}")
            case Error(error=reason):
                assert reason == "boom"


@pytest.mark.unit
class TestResultHelpers:
    """Tests for unwrap and is_result."""

    def test_unwrap_success(self) -> None:
        """Test unwrapping a success returns its data."""
        assert success_result("value").unwrap() == "value"

    def test_unwrap_error_raises(self) -> None:
        """Test unwrapping an error raises ResultUnwrapError."""
        with pytest.raises(ResultUnwrapError) as exc_info:
            error_result("boom").unwrap()

        assert exc_info.value.error == "boom"

    def test_unwrap_error_chains_exception(self) -> None:
        """Test unwrapping an error carrying an exception chains it."""
        cause = ValueError("bad")

        with pytest.raises(ResultUnwrapError) as exc_info:
            error_result(cause).unwrap()

        assert exc_info.value.__cause__ is cause

    def test_is_result(self) -> None:
        """Test is_result only accepts real result instances."""

        class LooksLikeResult:
            is_ok = True
            is_err = False

        assert is_result(success_result(1))
        assert is_result(error_result(1))
        assert not is_result(LooksLikeResult())
        assert not is_result({"is_ok": True, "is_err": False})
        assert not is_result(None)
