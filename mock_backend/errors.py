"""Error responses for mock backend"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Error carrying an HTTP status and optional field errors"""

    def __init__(self, status_code: int, message: str, errors: Optional[list[dict]] = None):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(message)


def error_body(message: str, errors: Optional[list[dict]] = None) -> dict:
    return {"success": False, "message": message, "errors": errors or []}


def install_error_handlers(app: FastAPI) -> None:
    """Render every error as ``{success: false, message, errors}``"""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": str(err["loc"][-1]) if err.get("loc") else "body", "message": err["msg"]}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=422, content=error_body("Validation failed", errors))
