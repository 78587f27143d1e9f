"""
Signup flow.

- SignUpUseCase.sign_up(email, password, repeat_password)
- SignUpRouter.route(http_request) -> HttpResponse

Request body keys follow the client contract: email, password, repeatPassword.
"""
import logging
from collections.abc import Mapping
from typing import Any

from starlette.concurrency import run_in_threadpool

from login_api.core.errors import AppError, InvalidParamError, MissingParamError
from login_api.core.http_response import HttpResponse, created, from_error, server_error
from login_api.features.accounts.repository import AccountRepository
from login_api.features.login.contracts import EmailValidator, resolve
from login_api.models.account import Account

logger = logging.getLogger("login_api")

# bcrypt refuses passwords longer than this
MAX_PASSWORD_BYTES = 72


class SignUpUseCase:
    def __init__(self, account_repository: AccountRepository, email_validator: EmailValidator):
        self.account_repository = account_repository
        self.email_validator = email_validator

    async def sign_up(self, email: str, password: str, repeat_password: str) -> Account:
        """
        Create an account when the password matches its confirmation.

        Raises:
            MissingParamError: a field is absent or empty
            InvalidParamError: non-string field, malformed email, password over
                MAX_PASSWORD_BYTES, or mismatched confirmation
            ConflictError: email already registered
        """
        fields = (("email", email), ("password", password), ("repeatPassword", repeat_password))
        for name, value in fields:
            if not value:
                raise MissingParamError(name)
        for name, value in fields:
            if not isinstance(value, str):
                raise InvalidParamError(name)
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise InvalidParamError("password")
        if not await resolve(self.email_validator.is_valid(email)):
            raise InvalidParamError("email")
        if password != repeat_password:
            raise InvalidParamError("repeatPassword")

        # bcrypt and the DB driver are blocking
        account = await run_in_threadpool(self.account_repository.add, email, password)
        logger.info("signup.created", extra={"event_type": "signup"})
        return account


class SignUpRouter:
    def __init__(self, sign_up_use_case: SignUpUseCase):
        self.sign_up_use_case = sign_up_use_case

    async def route(self, http_request: Any = None) -> HttpResponse:
        body = http_request.get("body") if isinstance(http_request, Mapping) else None
        if not isinstance(body, Mapping):
            return server_error()
        try:
            account = await self.sign_up_use_case.sign_up(
                body.get("email"),
                body.get("password"),
                body.get("repeatPassword"),
            )
        except AppError as exc:
            logger.warning("signup.rejected", extra={"error_code": exc.code})
            return from_error(exc)
        return created(account.public())
