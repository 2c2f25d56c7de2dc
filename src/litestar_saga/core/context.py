"""Workflow execution context.

This module provides the typed, token-keyed store that every step of one
workflow run shares.
"""

from __future__ import annotations

from itertools import count
from typing import Any, Generic, TypeVar, overload

from litestar_saga.core.types import T
from litestar_saga.exceptions import ContextTypeNotDefinedError

__all__ = ["ContextToken", "WorkflowContext", "create_token"]

D = TypeVar("D")

_token_ids = count(1)


class ContextToken(Generic[T]):
    """Opaque key identifying one typed slot in a :class:`WorkflowContext`.

    Tokens compare and hash by identity, so two tokens are always distinct
    even when created with the same name. The type parameter only exists for
    static checkers: ``context.get(token)`` is typed as ``T | None``.

    Create tokens once, typically at module level, and reuse them across runs.

    Attributes:
        name: Optional label used in reprs and error messages.
    """

    __slots__ = ("_id", "name")

    def __init__(self, name: str | None = None) -> None:
        """Initialize the token.

        Args:
            name: Optional label used in reprs and error messages.
        """
        self._id = next(_token_ids)
        self.name = name

    def __repr__(self) -> str:
        label = self.name or "anonymous"
        return f"ContextToken({label}#{self._id})"


def create_token(name: str | None = None) -> ContextToken[Any]:
    """Create a new context token.

    Annotate the assignment to give the token its value type.

    Args:
        name: Optional label used in reprs and error messages.

    Returns:
        A new token, distinct from every other token.

    Example:
        >>> ORDER_ID: ContextToken[str] = create_token("order_id")
    """
    return ContextToken(name)


class WorkflowContext:
    """Store shared by all steps of a single workflow run.

    The engine owns one context per run and passes it by reference to every
    step's ``run`` and ``rollback``. Steps may read and write any slot; there is
    no isolation between them. Values are not validated against the token's
    declared type.

    Example:
        >>> USER: ContextToken[str] = create_token("user")
        >>> context = WorkflowContext()
        >>> context.get(USER) is None
        True
        >>> context.set(USER, "alice")
        >>> context.get_or_raise(USER)
        'alice'
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[ContextToken[Any], Any] = {}

    @overload
    def get(self, token: ContextToken[T]) -> T | None: ...

    @overload
    def get(self, token: ContextToken[T], default: D) -> T | D: ...

    def get(self, token: ContextToken[Any], default: Any = None) -> Any:
        """Retrieve the value stored for ``token``.

        A token that was never set and a token set to ``None`` look the same
        through this method.

        Args:
            token: The slot to read.
            default: Value to return when nothing is stored.

        Returns:
            The stored value, or ``default``.
        """
        value = self._data.get(token)
        return default if value is None else value

    def get_or_raise(self, token: ContextToken[T]) -> T:
        """Retrieve the value stored for ``token``, raising if it was never set.

        Args:
            token: The slot to read.

        Returns:
            The stored value.

        Raises:
            ContextTypeNotDefinedError: If ``token`` was never set in this context.
        """
        try:
            return self._data[token]
        except KeyError:
            raise ContextTypeNotDefinedError(token) from None

    def set(self, token: ContextToken[T], value: T) -> None:
        """Store ``value`` for ``token``, replacing any previous value.

        Args:
            token: The slot to write.
            value: The value to store.
        """
        self._data[token] = value

    def __len__(self) -> int:
        return len(self._data)
