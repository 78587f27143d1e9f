"""
Collaborator protocols for the login flow.

Implementations may return plain values or awaitables; the login router
and signup flows accept either.
"""
import inspect
from typing import Awaitable, Optional, Protocol, Union


class EmailValidator(Protocol):
    def is_valid(self, email: str) -> Union[bool, Awaitable[bool]]:
        """Return True when `email` is a well-formed address."""
        ...


class AuthUseCase(Protocol):
    def auth(self, email: str, password: str) -> Union[Optional[str], Awaitable[Optional[str]]]:
        """Return an access token for valid credentials, None otherwise."""
        ...


async def resolve(value):
    """Await `value` if it is awaitable, else return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value
