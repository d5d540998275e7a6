"""
Uniform error envelopes for every service app.

Validation failures become 400 with a descriptive message instead of
FastAPI's default 422 so the storefront can show the message verbatim.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

logger = structlog.get_logger(__name__)


def describe_validation_error(error: dict) -> str:
    field = next((str(part) for part in reversed(error.get("loc", ())) if isinstance(part, str)), "body")
    if field == "_id":
        field = "id"
    if error.get("type") == "missing":
        return f"{field.replace('_', ' ').capitalize()} is required"
    return f"{field}: {error.get('msg', 'invalid value')}"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = describe_validation_error(errors[0]) if errors else "Invalid request"
    logger.info("request_rejected", path=request.url.path, reason=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": message,
            "errors": [
                {"loc": [str(p) for p in e.get("loc", ())], "msg": e.get("msg")}
                for e in errors
            ],
        },
    )


def install_error_handlers(app: FastAPI):
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
