"""Result protocol shared by steps and workflows.

Every step and every workflow run reports its outcome as one of two variants,
:class:`Success` or :class:`Error`, instead of raising. Each variant carries the
``is_ok``/``is_err`` discriminants as class-level constants, so a value can never
have both or neither set.

Branch on the discriminants (or with ``match``), never on the truthiness of the
payload: error values such as ``""`` or ``0`` are legitimate.

Example:
    >>> result = success_result(42)
    >>> result.is_ok, result.is_err
    (True, False)
    >>> match error_result("boom"):
    ...     case Error(error=reason):
    ...         print(reason)
    boom
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Literal, NoReturn, TypeAlias, Union

from litestar_saga.core.types import E, T
from litestar_saga.exceptions import ResultUnwrapError

__all__ = [
    "Error",
    "Result",
    "Success",
    "error_result",
    "is_result",
    "success_result",
]


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying ``data``.

    Attributes:
        data: The value produced by the operation.
    """

    data: T

    status: ClassVar[Literal["success"]] = "success"
    is_ok: ClassVar[Literal[True]] = True
    is_err: ClassVar[Literal[False]] = False

    def unwrap(self) -> T:
        """Return the carried data."""
        return self.data


@dataclass(frozen=True)
class Error(Generic[E]):
    """Failed outcome carrying ``error``.

    Attributes:
        error: The error value. May be any object, including an exception.
    """

    error: E

    status: ClassVar[Literal["error"]] = "error"
    is_ok: ClassVar[Literal[False]] = False
    is_err: ClassVar[Literal[True]] = True

    def unwrap(self) -> NoReturn:
        """Raise, since an error result carries no data.

        Raises:
            ResultUnwrapError: Always. Chained to ``error`` when it is an exception.
        """
        if isinstance(self.error, BaseException):
            raise ResultUnwrapError(self.error) from self.error
        raise ResultUnwrapError(self.error)


Result: TypeAlias = Union[Success[T], Error[E]]
"""A value that is either a :class:`Success` or an :class:`Error`."""


def success_result(data: T) -> Success[T]:
    """Build a success result.

    Args:
        data: The value to carry.

    Returns:
        A :class:`Success` with ``is_ok=True`` and ``is_err=False``.
    """
    return Success(data)


def error_result(error: E) -> Error[E]:
    """Build an error result.

    Args:
        error: The error value to carry.

    Returns:
        An :class:`Error` with ``is_ok=False`` and ``is_err=True``.
    """
    return Error(error)


def is_result(value: Any) -> bool:
    """Check whether ``value`` is a :class:`Success` or an :class:`Error`.

    Only real result instances qualify. Objects that merely expose ``is_ok``
    and ``is_err`` attributes are not results.
    """
    return isinstance(value, (Success, Error))
