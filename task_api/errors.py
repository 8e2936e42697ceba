import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from . import config

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal Server Error"


class TaskStorageError(Exception):
    """Raised by task handlers when the database rejects an operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _error_detail(exc: BaseException) -> str:
    # Only development deployments see the underlying error text.
    cause = exc.__cause__ or exc
    return str(cause) if config.EXPOSE_ERROR_DETAIL else GENERIC_ERROR


async def task_storage_error_handler(request: Request, exc: TaskStorageError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": exc.message, "error": _error_detail(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Something went wrong!", "error": _error_detail(exc)},
    )
