"""Tests for the login router decision procedure."""
import asyncio

import pytest

from login_api.core.errors import InvalidParamError, MissingParamError, ServerError, UnauthorizedError
from login_api.features.login.router import LoginRouter
from login_api.models.outcome import MissingField, ServerFault, Success, Unauthorized


class AuthUseCaseSpy:
    def __init__(self, access_token="valid_token"):
        self.access_token = access_token
        self.email = None
        self.password = None
        self.calls = 0

    def auth(self, email, password):
        self.email = email
        self.password = password
        self.calls += 1
        return self.access_token


class AsyncAuthUseCaseSpy(AuthUseCaseSpy):
    async def auth(self, email, password):
        await asyncio.sleep(0)
        return super().auth(email, password)


class AuthUseCaseWithError:
    def auth(self, email, password):
        raise RuntimeError("auth backend down")


class SlowAuthUseCase:
    async def auth(self, email, password):
        await asyncio.sleep(1)
        return "late_token"


class EmailValidatorSpy:
    def __init__(self, is_email_valid=True):
        self.is_email_valid = is_email_valid
        self.email = None

    def is_valid(self, email):
        self.email = email
        return self.is_email_valid


class EmailValidatorWithError:
    def is_valid(self, email):
        raise RuntimeError("validator exploded")


def make_sut():
    auth_use_case_spy = AuthUseCaseSpy()
    email_validator_spy = EmailValidatorSpy()
    sut = LoginRouter(auth_use_case_spy, email_validator_spy)
    return sut, auth_use_case_spy, email_validator_spy


def credentials(email="any_email@mail.com", password="any_password"):
    return {"body": {"email": email, "password": password}}


@pytest.mark.asyncio
async def test_returns_400_if_no_email_is_provided():
    sut, _, _ = make_sut()
    response = await sut.route({"body": {"password": "any_password"}})
    assert response.status_code == 400
    assert response.body == MissingParamError("email").to_body()


@pytest.mark.asyncio
async def test_returns_400_if_email_is_empty():
    sut, _, _ = make_sut()
    response = await sut.route({"body": {"email": "", "password": "any_password"}})
    assert response.status_code == 400
    assert response.body["error"]["param"] == "email"


@pytest.mark.asyncio
async def test_returns_400_if_no_password_is_provided():
    sut, _, _ = make_sut()
    response = await sut.route({"body": {"email": "any_email@mail.com"}})
    assert response.status_code == 400
    assert response.body == MissingParamError("password").to_body()


@pytest.mark.asyncio
async def test_email_is_reported_before_password():
    sut, _, _ = make_sut()
    response = await sut.route({"body": {}})
    assert response.body == MissingParamError("email").to_body()


@pytest.mark.asyncio
async def test_returns_500_if_no_request_is_provided():
    sut, _, _ = make_sut()
    response = await sut.route()
    assert response.status_code == 500
    assert response.body == ServerError().to_body()


@pytest.mark.asyncio
async def test_returns_500_if_request_has_no_body():
    sut, _, _ = make_sut()
    response = await sut.route({})
    assert response.status_code == 500
    assert response.body == ServerError().to_body()


@pytest.mark.asyncio
async def test_returns_500_if_body_is_not_an_object():
    sut, _, _ = make_sut()
    response = await sut.route({"body": ["email", "password"]})
    assert response.status_code == 500


@pytest.mark.asyncio
async def test_calls_auth_use_case_with_correct_params():
    sut, auth_use_case_spy, _ = make_sut()
    request = credentials()
    await sut.route(request)
    assert auth_use_case_spy.email == request["body"]["email"]
    assert auth_use_case_spy.password == request["body"]["password"]


@pytest.mark.asyncio
async def test_calls_email_validator_with_correct_email():
    sut, _, email_validator_spy = make_sut()
    request = credentials()
    await sut.route(request)
    assert email_validator_spy.email == request["body"]["email"]


@pytest.mark.asyncio
async def test_returns_400_if_email_format_is_invalid():
    sut, auth_use_case_spy, email_validator_spy = make_sut()
    email_validator_spy.is_email_valid = False
    response = await sut.route(credentials(email="invalid_email"))
    assert response.status_code == 400
    assert response.body == InvalidParamError("email").to_body()
    assert auth_use_case_spy.calls == 0


@pytest.mark.asyncio
async def test_returns_401_when_invalid_credentials_are_provided():
    sut, auth_use_case_spy, _ = make_sut()
    auth_use_case_spy.access_token = None
    response = await sut.route(credentials("wrong_email@mail.com", "wrong_password"))
    assert response.status_code == 401
    assert response.body == UnauthorizedError().to_body()


@pytest.mark.asyncio
async def test_returns_401_when_token_is_empty():
    sut, auth_use_case_spy, _ = make_sut()
    auth_use_case_spy.access_token = ""
    response = await sut.route(credentials())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_returns_200_when_valid_credentials_are_provided():
    sut, auth_use_case_spy, _ = make_sut()
    response = await sut.route(credentials("valid_email@mail.com", "valid_password"))
    assert response.status_code == 200
    assert response.body == {"accessToken": auth_use_case_spy.access_token}


@pytest.mark.asyncio
async def test_any_non_empty_token_is_success():
    sut, auth_use_case_spy, _ = make_sut()
    auth_use_case_spy.access_token = "eyJ.some.jwt"
    response = await sut.route(credentials())
    assert response.status_code == 200
    assert response.body["accessToken"] == "eyJ.some.jwt"


@pytest.mark.asyncio
async def test_awaits_async_collaborators():
    auth_use_case_spy = AsyncAuthUseCaseSpy(access_token="async_token")
    sut = LoginRouter(auth_use_case_spy, EmailValidatorSpy())
    response = await sut.route(credentials())
    assert response.status_code == 200
    assert response.body == {"accessToken": "async_token"}
    assert auth_use_case_spy.email == "any_email@mail.com"


@pytest.mark.asyncio
async def test_returns_500_if_no_auth_use_case_is_provided():
    sut = LoginRouter()
    response = await sut.route(credentials())
    assert response.status_code == 500
    assert response.body == ServerError().to_body()


@pytest.mark.asyncio
async def test_returns_500_if_auth_use_case_has_no_auth_method():
    sut = LoginRouter(object(), EmailValidatorSpy())
    response = await sut.route(credentials())
    assert response.status_code == 500
    assert response.body == ServerError().to_body()


@pytest.mark.asyncio
async def test_returns_500_if_auth_use_case_raises():
    sut = LoginRouter(AuthUseCaseWithError(), EmailValidatorSpy())
    response = await sut.route(credentials())
    assert response.status_code == 500
    assert "auth backend down" not in str(response.body)


@pytest.mark.asyncio
async def test_returns_500_if_no_email_validator_is_provided():
    sut = LoginRouter(AuthUseCaseSpy())
    response = await sut.route(credentials())
    assert response.status_code == 500
    assert response.body == ServerError().to_body()


@pytest.mark.asyncio
async def test_returns_500_if_email_validator_has_no_is_valid_method():
    sut = LoginRouter(AuthUseCaseSpy(), object())
    response = await sut.route(credentials())
    assert response.status_code == 500
    assert response.body == ServerError().to_body()


@pytest.mark.asyncio
async def test_returns_500_if_email_validator_raises():
    sut = LoginRouter(AuthUseCaseSpy(), EmailValidatorWithError())
    response = await sut.route(credentials())
    assert response.status_code == 500
    assert "validator exploded" not in str(response.body)


@pytest.mark.asyncio
async def test_returns_500_when_auth_times_out():
    sut = LoginRouter(SlowAuthUseCase(), EmailValidatorSpy(), auth_timeout=0.01)
    response = await sut.route(credentials())
    assert response.status_code == 500


@pytest.mark.asyncio
async def test_validate_yields_outcomes():
    sut, auth_use_case_spy, _ = make_sut()
    assert await sut.validate(None) == ServerFault()
    assert await sut.validate({"body": {"password": "p"}}) == MissingField("email")
    assert await sut.validate(credentials("a@b.com", "p")) == Success("valid_token")
    auth_use_case_spy.access_token = None
    assert await sut.validate(credentials("a@b.com", "wrong")) == Unauthorized()


@pytest.mark.asyncio
async def test_repeated_calls_are_identical():
    sut, _, _ = make_sut()
    request = credentials("a@b.com", "p")
    first = await sut.route(request)
    second = await sut.route(request)
    assert first == second
    assert first.body == {"accessToken": "valid_token"}


@pytest.mark.asyncio
async def test_returns_400_if_email_is_not_a_string():
    sut, auth_use_case_spy, email_validator_spy = make_sut()
    response = await sut.route({"body": {"email": 123, "password": "any_password"}})
    assert response.status_code == 400
    assert response.body == InvalidParamError("email").to_body()
    assert email_validator_spy.email is None
    assert auth_use_case_spy.calls == 0


@pytest.mark.asyncio
async def test_returns_400_if_password_is_not_a_string():
    sut, auth_use_case_spy, _ = make_sut()
    response = await sut.route({"body": {"email": "any_email@mail.com", "password": {"value": "x"}}})
    assert response.status_code == 400
    assert response.body == InvalidParamError("password").to_body()
    assert auth_use_case_spy.calls == 0
