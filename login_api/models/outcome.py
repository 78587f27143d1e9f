"""
Login outcomes.

Transport-agnostic result of validating one login request. Each variant is
immutable; the response mapper turns it into an HttpResponse.
"""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MissingField:
    field_name: str
    kind = "missing_field"


@dataclass(frozen=True)
class InvalidField:
    field_name: str
    kind = "invalid_field"


@dataclass(frozen=True)
class Unauthorized:
    kind = "unauthorized"


@dataclass(frozen=True)
class ServerFault:
    kind = "server_fault"


@dataclass(frozen=True)
class Success:
    token: str
    kind = "success"


Outcome = Union[MissingField, InvalidField, Unauthorized, ServerFault, Success]
