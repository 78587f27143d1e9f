"""
Auth API: login and signup.

Collaborators are built per request by the provider functions below; tests
swap them with app.dependency_overrides.
"""
import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from login_api.core.config import settings
from login_api.core.http_response import HttpResponse
from login_api.core.logging import get_request_id
from login_api.features.accounts.repository import AccountRepository
from login_api.features.login.auth_service import AuthUseCase
from login_api.features.login.email_validator import EmailValidator
from login_api.features.login.router import LoginRouter
from login_api.features.signup.service import SignUpRouter, SignUpUseCase

logger = logging.getLogger("login_api")

router = APIRouter()


def get_account_repository() -> AccountRepository:
    return AccountRepository()


def get_email_validator() -> EmailValidator:
    return EmailValidator()


def get_auth_use_case(repo: AccountRepository = Depends(get_account_repository)) -> AuthUseCase:
    return AuthUseCase(repo)


def get_login_router(
    auth_use_case: AuthUseCase = Depends(get_auth_use_case),
    email_validator: EmailValidator = Depends(get_email_validator),
) -> LoginRouter:
    return LoginRouter(auth_use_case, email_validator, auth_timeout=settings.AUTH_TIMEOUT_SECONDS)


def get_signup_router(
    repo: AccountRepository = Depends(get_account_repository),
    email_validator: EmailValidator = Depends(get_email_validator),
) -> SignUpRouter:
    return SignUpRouter(SignUpUseCase(repo, email_validator))


async def _read_json_body(request: Request) -> Optional[Any]:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        logger.warning("request.body_unparseable", extra={"path": request.url.path})
        return None


def _to_json_response(http_response: HttpResponse) -> JSONResponse:
    response = JSONResponse(status_code=http_response.status_code, content=http_response.body)
    rid = get_request_id()
    if rid:
        response.headers["x-request-id"] = rid
    return response


@router.post("/login")
async def login(request: Request, login_router: LoginRouter = Depends(get_login_router)):
    body = await _read_json_body(request)
    http_response = await login_router.route({"body": body})
    return _to_json_response(http_response)


@router.post("/signup")
async def signup(request: Request, signup_router: SignUpRouter = Depends(get_signup_router)):
    body = await _read_json_body(request)
    http_response = await signup_router.route({"body": body})
    return _to_json_response(http_response)
