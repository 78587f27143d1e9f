"""Error taxonomy and FastAPI exception handlers."""

import logging
from typing import Optional
from uuid import uuid4

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

from login_api.core.logging import get_request_id


class AppError(Exception):
    code = "app_error"
    status_code = 500

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None, request_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code
        self.request_id = request_id

    def to_body(self) -> dict:
        """Client-facing error body. Carries nothing beyond code and message."""
        return {"error": {"code": self.code, "message": self.message}}

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.to_body() == other.to_body() and self.status_code == other.status_code

    def __hash__(self):
        return hash((type(self), self.code, self.message))

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r})"


class MissingParamError(AppError):
    """A required request parameter was absent or empty."""
    code = "missing_param"
    status_code = 400

    def __init__(self, param_name: str):
        super().__init__(f"Missing param: {param_name}")
        self.param_name = param_name

    def to_body(self) -> dict:
        body = super().to_body()
        body["error"]["param"] = self.param_name
        return body


class InvalidParamError(AppError):
    """A request parameter was present but malformed."""
    code = "invalid_param"
    status_code = 400

    def __init__(self, param_name: str):
        super().__init__(f"Invalid param: {param_name}")
        self.param_name = param_name

    def to_body(self) -> dict:
        body = super().to_body()
        body["error"]["param"] = self.param_name
        return body


class UnauthorizedError(AppError):
    code = "unauthorized"
    status_code = 401

    def __init__(self):
        super().__init__("Unauthorized")


class ServerError(AppError):
    code = "internal_error"
    status_code = 500

    def __init__(self):
        super().__init__("Internal error")


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


def _extract_request_id(request: Request, fallback: Optional[str] = None) -> str:
    return (
        getattr(request.state, "request_id", None)
        or get_request_id()
        or fallback
        or str(uuid4())
    )


def _error_payload(body: dict, request_id: str) -> dict:
    payload = {"error": dict(body["error"])}
    payload["error"]["request_id"] = request_id
    payload["detail"] = body["error"]["message"]
    return payload


async def app_error_handler(request: Request, exc: AppError):
    rid = exc.request_id or _extract_request_id(request)
    payload = _error_payload(exc.to_body(), rid)
    logger = logging.getLogger("login_api")
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        log_level,
        "app.error",
        extra={"request_id": rid, "error_code": exc.code, "error_message": exc.message, "status": exc.status_code},
    )
    response = JSONResponse(status_code=exc.status_code, content=payload)
    response.headers["x-request-id"] = rid
    return response


async def http_error_handler(request: Request, exc: HTTPException):
    rid = _extract_request_id(request)
    code = "not_found" if exc.status_code == 404 else "http_error"
    message = exc.detail if exc.detail else "HTTP error"
    payload = _error_payload({"error": {"code": code, "message": message}}, rid)
    logger = logging.getLogger("login_api")
    logger.warning("http.error", extra={"request_id": rid, "error_code": code, "status": exc.status_code})
    response = JSONResponse(status_code=exc.status_code, content=payload)
    response.headers["x-request-id"] = rid
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError):
    rid = _extract_request_id(request)
    payload = _error_payload({"error": {"code": "validation_error", "message": "Request validation failed"}}, rid)
    logging.getLogger("login_api").warning("validation.error", extra={"request_id": rid, "error_code": "validation_error", "status": 422})
    response = JSONResponse(status_code=422, content=payload)
    response.headers["x-request-id"] = rid
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = _extract_request_id(request)
    logger = logging.getLogger("login_api")
    logger.error("unhandled.exception", exc_info=True, extra={"request_id": rid, "error_code": ServerError.code})
    payload = _error_payload(ServerError().to_body(), rid)
    response = JSONResponse(status_code=500, content=payload)
    response.headers["x-request-id"] = rid
    return response
