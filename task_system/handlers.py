import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response

from task_system.errors import (
    AlreadyExists,
    AuthenticationFailed,
    NotFound,
    Unauthenticated,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


def _text(status_code: int, message: str, exc: Exception) -> PlainTextResponse:
    return PlainTextResponse(f"{message}. Exception: {exc}", status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return _text(404, "Entity not found", exc)

    @app.exception_handler(AlreadyExists)
    async def already_exists(request: Request, exc: AlreadyExists):
        return _text(409, "Entity already exists", exc)

    @app.exception_handler(ValidationFailed)
    async def validation_failed(request: Request, exc: ValidationFailed):
        return _text(400, "Validation Failed", exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_failed(request: Request, exc: RequestValidationError):
        # malformed JSON bodies land here as well
        errors = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in exc.errors()
        )
        return PlainTextResponse(f"Validation Failed. Exception: {errors}", status_code=400)

    @app.exception_handler(AuthenticationFailed)
    async def authentication_failed(request: Request, exc: AuthenticationFailed):
        return _text(401, "Authentication Failed", exc)

    @app.exception_handler(Unauthenticated)
    async def unauthenticated(request: Request, exc: Unauthenticated):
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc)
        return Response(status_code=403)
