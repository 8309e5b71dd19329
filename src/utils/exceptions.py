import logging
from typing import Any, Dict, Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

class AttendanceError(Exception):
    """Base for errors raised by the attendance services and rendered as `{success: false, error}`"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class NotFoundError(AttendanceError):
    status_code = status.HTTP_404_NOT_FOUND

class InvalidArgumentError(AttendanceError):
    status_code = status.HTTP_400_BAD_REQUEST

class ConflictError(AttendanceError):
    """
    Raised when a session already exists for a course and day.

    Existing clients expect this as a regular 200 response with `success: false`
    and the id of the session already in place.
    """
    status_code = status.HTTP_200_OK

    def __init__(self, message: str, session_id: Optional[str] = None):
        super().__init__(message)
        self.session_id = session_id

def error_body(message: str, **extra: Any) -> Dict[str, Any]:
    return {"success": False, "error": message, **extra}

def add_exception_handlers(app: FastAPI) -> None:
    """Registers the handlers translating service and store errors into the response envelope"""

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, sessionId=exc.session_id),
        )

    @app.exception_handler(AttendanceError)
    async def attendance_error_handler(request: Request, exc: AttendanceError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(PyMongoError)
    async def store_failure_handler(request: Request, exc: PyMongoError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(str(exc)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(str(exc)),
        )
