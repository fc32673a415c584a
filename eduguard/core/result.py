"""Result types for railway-oriented programming.

Expected outcomes of the access-control workflows (a wrong password, a
locked account, a duplicate email at registration) are returned as values
instead of raised, so callers must handle both branches explicitly.

Usage:
    result = await handler.handle(AuthenticateAccount(email=..., password=...))
    match result:
        case Success(value=account):
            ...
        case Failure(error=InvalidCredentials() as error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
