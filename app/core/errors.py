"""
Errores de dominio y su traducción a respuestas JSON.

Todas las respuestas de error de la API tienen la forma
``{"success": false, "error": "<mensaje>"}``.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BlogError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class PostValidationError(BlogError):
    status_code = 400
    default_message = "Title and content are required"


class PostNotFoundError(BlogError):
    status_code = 404
    default_message = "Post not found"


class StoreError(BlogError):
    """Fallo de la base de datos; se propaga una sola vez, sin reintentos."""
    status_code = 500
    default_message = "Database error"


class WeatherLookupError(Exception):
    """Fallo de la consulta de clima. Nunca sale del pipeline de temas."""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} falló: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Un id no numérico en la ruta equivale a un post inexistente
    if any(tuple(err.get("loc", ()))[:1] == ("path",) for err in exc.errors()):
        return error_response(404, PostNotFoundError.default_message)
    return error_response(400, _describe_validation_error(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Error inesperado en {request.method} {request.url.path}")
    return error_response(500, str(exc) or BlogError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
