"""
Transport responses.

Pure helpers that build the {status_code, body} pair handed back to the HTTP
layer. `from_outcome` is total over every login outcome variant.
"""
from dataclasses import dataclass
from typing import Any

from login_api.core.errors import (
    AppError,
    InvalidParamError,
    MissingParamError,
    ServerError,
    UnauthorizedError,
)
from login_api.models.outcome import (
    InvalidField,
    MissingField,
    Outcome,
    ServerFault,
    Success,
    Unauthorized,
)


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: Any


def bad_request(error: AppError) -> HttpResponse:
    return HttpResponse(status_code=400, body=error.to_body())


def unauthorized_error() -> HttpResponse:
    return HttpResponse(status_code=401, body=UnauthorizedError().to_body())


def server_error() -> HttpResponse:
    return HttpResponse(status_code=500, body=ServerError().to_body())


def ok(data: Any) -> HttpResponse:
    return HttpResponse(status_code=200, body=data)


def created(data: Any) -> HttpResponse:
    return HttpResponse(status_code=201, body=data)


def from_error(error: AppError) -> HttpResponse:
    """Map any taxonomy error to its own status code."""
    return HttpResponse(status_code=error.status_code, body=error.to_body())


def from_outcome(outcome: Outcome) -> HttpResponse:
    if isinstance(outcome, MissingField):
        return bad_request(MissingParamError(outcome.field_name))
    if isinstance(outcome, InvalidField):
        return bad_request(InvalidParamError(outcome.field_name))
    if isinstance(outcome, Unauthorized):
        return unauthorized_error()
    if isinstance(outcome, Success):
        return ok({"accessToken": outcome.token})
    if isinstance(outcome, ServerFault):
        return server_error()
    raise TypeError(f"Unknown login outcome: {outcome!r}")
