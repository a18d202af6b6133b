"""
Global middleware and error envelopes.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from userauth.core.errors import AuthError, MalformedRequestError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def failed(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "failed", "message": message})


def register_middleware(app: FastAPI) -> None:
    """Attach content-type middleware and the failed-envelope exception handlers."""

    @app.middleware("http")
    async def set_content_type(request: Request, call_next):
        response = await call_next(request)
        # Handlers already answer with JSON; this covers bare responses
        response.headers.setdefault("Content-Type", JSON_CONTENT_TYPE)
        return response

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
        return failed(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def malformed_body_handler(request: Request, exc: RequestValidationError):
        # Unreadable JSON or wrong field types never reach the validator
        errors = exc.errors()
        detail = errors[0].get("msg", "invalid body") if errors else "invalid body"
        error = MalformedRequestError(f"Malformed request body: {detail}")
        return await auth_error_handler(request, error)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return failed(exc.status_code, str(exc.detail))
