"""
Login router.

Turns an inbound request payload ({"body": {"email", "password"}}) into a
login outcome and then into an HttpResponse. This is the failure boundary of
the login path: a missing body, a missing or broken collaborator, or a
collaborator that raises all become ServerFault. Nothing propagates to the
caller.

Order of checks:
1. email present
2. password present
3. email and password are strings
4. email format (EmailValidator.is_valid)
5. credentials (AuthUseCase.auth)
"""
import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Optional

from login_api.core.http_response import HttpResponse, from_outcome
from login_api.core.logging import log_event
from login_api.features.login.contracts import AuthUseCase, EmailValidator, resolve
from login_api.models.outcome import (
    InvalidField,
    MissingField,
    Outcome,
    ServerFault,
    Success,
    Unauthorized,
)

logger = logging.getLogger("login_api")


class MalformedRequestError(ValueError):
    """Raised when the inbound payload has no usable body."""


def _extract_body(http_request: Any) -> Mapping:
    if not isinstance(http_request, Mapping):
        raise MalformedRequestError("request payload is missing")
    body = http_request.get("body")
    if not isinstance(body, Mapping):
        raise MalformedRequestError("request body is missing")
    return body


class LoginRouter:
    def __init__(
        self,
        auth_use_case: Optional[AuthUseCase] = None,
        email_validator: Optional[EmailValidator] = None,
        *,
        auth_timeout: Optional[float] = None,
    ):
        self.auth_use_case = auth_use_case
        self.email_validator = email_validator
        self.auth_timeout = auth_timeout or None

    async def _authenticate(self, email: str, password: str) -> Optional[str]:
        call = resolve(self.auth_use_case.auth(email, password))
        if self.auth_timeout:
            return await asyncio.wait_for(call, timeout=self.auth_timeout)
        return await call

    async def validate(self, http_request: Any = None) -> Outcome:
        try:
            body = _extract_body(http_request)
            email = body.get("email")
            password = body.get("password")

            if not email:
                return MissingField("email")
            if not password:
                return MissingField("password")
            if not isinstance(email, str):
                return InvalidField("email")
            if not isinstance(password, str):
                return InvalidField("password")

            if not await resolve(self.email_validator.is_valid(email)):
                return InvalidField("email")

            access_token = await self._authenticate(email, password)
            if not access_token:
                return Unauthorized()
            return Success(access_token)
        except Exception as exc:
            logger.error(
                "login.fault",
                exc_info=True,
                extra={"error_code": "internal_error", "event_type": type(exc).__name__},
            )
            return ServerFault()

    async def route(self, http_request: Any = None) -> HttpResponse:
        outcome = await self.validate(http_request)
        log_event("info", "login.outcome", event_type="login", extra={"outcome": outcome.kind})
        return from_outcome(outcome)
