import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from canteen.core.errors import CanteenError, StorageError

log = logging.getLogger(__name__)


async def canteen_error_handler(request: Request, exc: CanteenError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    # Reads outside atomic() can still hit the driver; never echo its text
    log.exception("unhandled storage error on %s %s", request.method, request.url.path)
    return await canteen_error_handler(request, StorageError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CanteenError, canteen_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
