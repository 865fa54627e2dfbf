"""Exception handlers translating errors into JSON responses."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.userapi.core.exceptions import UserApiError

INVALID_DATA_MESSAGE = "The given data was invalid."


async def user_api_error_handler(request: Request, exc: UserApiError) -> JSONResponse:
    content: dict = {"message": exc.message}
    if exc.errors is not None:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reshape request validation failures into per-field messages."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # Drop the leading "body" / "path" / "query" location segment
        location = error["loc"][1:] or error["loc"]
        field = ".".join(str(part) for part in location)
        errors.setdefault(field, []).append(error["msg"])

    logger.warning("Request validation failed for fields: {}", ", ".join(errors))
    return JSONResponse(
        status_code=422,
        content={"message": INVALID_DATA_MESSAGE, "errors": errors},
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserApiError, user_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
