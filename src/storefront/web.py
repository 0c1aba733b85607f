"""FastAPI plumbing shared by every context's router.

Routers fetch the storefront from ``app.state`` through ``get_storefront``
and raise domain errors freely; ``register_error_handlers`` turns them into
JSON responses with a status code chosen by error type.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.exceptions import ValidationError as ProteanValidationError

from shared.errors import (
    AuthenticationError,
    DuplicateAccountError,
    EmptyCartError,
    InvalidSelectionError,
    LoginRequiredError,
    NotFoundError,
    StockError,
    ValidationError,
)
from storefront.context import Storefront

_STATUS_BY_ERROR = [
    (ValidationError, 400),
    (LoginRequiredError, 401),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (StockError, 409),
    (InvalidSelectionError, 409),
    (EmptyCartError, 409),
    (DuplicateAccountError, 409),
]


def get_storefront(request: Request) -> Storefront:
    return request.app.state.storefront


def status_for(error: ProteanValidationError) -> int:
    for error_cls, status in _STATUS_BY_ERROR:
        if isinstance(error, error_cls):
            return status
    return 400


async def marketplace_error_handler(request: Request, exc: ProteanValidationError) -> JSONResponse:
    messages = exc.messages if isinstance(exc.messages, dict) else {"_entity": [str(exc.messages)]}
    return JSONResponse(
        status_code=status_for(exc),
        content={"error": getattr(exc, "code", ValidationError.code), "messages": messages},
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": NotFoundError.code, "messages": {"_entity": [str(exc)]}},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProteanValidationError, marketplace_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
