import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class QRMenuError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(QRMenuError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidInput(QRMenuError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class CannotDeleteActiveVersion(QRMenuError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Cannot delete the active design. Activate another design first."


class UpstreamFailure(QRMenuError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "The data store could not complete the request"


async def qrmenu_error_handler(request: Request, exc: QRMenuError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Upstream messages can leak schema details, so only the log gets them
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=UpstreamFailure.status_code,
        content={"detail": UpstreamFailure.default_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QRMenuError, qrmenu_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
