"""Exception handlers flattening errors to plain-text responses."""

import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from ..exceptions import EnvaultException, ValidationError

logger = logging.getLogger(__name__)

_PYDANTIC_MSG_PREFIXES = ("Value error, ", "Assertion failed, ")


async def envault_exception_handler(request: Request, exc: EnvaultException) -> JSONResponse:
    """
    Log the error with its details and return ``{"error": message}``.

    Args:
        request: FastAPI request object
        exc: EnvaultException instance

    Returns:
        JSONResponse carrying only the human-readable message
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def _describe_validation_error(exc: RequestValidationError) -> ValidationError:
    errors = exc.errors()
    if not errors:
        return ValidationError("Invalid request")

    first = errors[0]
    msg = str(first.get("msg", "invalid value"))
    for prefix in _PYDANTIC_MSG_PREFIXES:
        if msg.startswith(prefix):
            msg = msg[len(prefix):]
            break

    # loc is ("body" | "query" | "path", field, ...); a bare ("body",) means no body
    loc = [str(part) for part in first.get("loc", ())[1:]]
    if not loc:
        return ValidationError(f"Invalid request: {msg}")

    field = ".".join(loc)
    return ValidationError(f"Invalid {field}: {msg}", field=field)


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report rejected request input as a 400 ``{"error": message}``."""
    return await envault_exception_handler(request, _describe_validation_error(exc))
