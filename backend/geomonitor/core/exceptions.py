"""
Application exceptions and global exception handlers for the FastAPI application.
Serializes exceptions into structured logs and sends them to the observability hook.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response
from fastapi.routing import APIRoute
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any, Callable, Coroutine, Dict, List, Optional, Type

from geomonitor.core.integrations.observability import record_exception


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Any = None,
        error_type: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        self.error_type = error_type
        super().__init__(self.message)


class PersistenceError(Exception):
    """Raised by repositories when a write violates a storage constraint."""


class GeospatialError(AppException):
    """
    Typed error for one entity/action pair.

    Not-found, validation, permission and storage failures of the same
    action share one error type and differ only in message.
    """
    def __init__(self, error_type: str, message: str, details: Any = None):
        super().__init__(
            message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_type=error_type,
        )


class CreationError(GeospatialError):
    pass


class ViewError(GeospatialError):
    pass


class UpdateError(GeospatialError):
    pass


class CollectionViewError(GeospatialError):
    pass


class SearchError(GeospatialError):
    pass


class RemoveError(GeospatialError):
    pass


class ErrorCatalog:
    """Builds the typed errors of one entity, e.g. WEREDA_CREATION_ERROR."""

    def __init__(self, entity: str, plural: str):
        self.entity = entity
        self.plural = plural

    def creation(self, message: str, details: Any = None) -> CreationError:
        return CreationError(f"{self.entity}_CREATION_ERROR", message, details)

    def view(self, message: str, details: Any = None) -> ViewError:
        return ViewError(f"{self.entity}_VIEW_ERROR", message, details)

    def update(self, message: str, details: Any = None) -> UpdateError:
        return UpdateError(f"UPDATE_{self.entity}_ERROR", message, details)

    def collection(self, message: str, details: Any = None) -> CollectionViewError:
        return CollectionViewError(f"VIEW_{self.plural}_COLLECTION_ERROR", message, details)

    def search(self, message: str, details: Any = None) -> SearchError:
        return SearchError(f"{self.entity}_SEARCH_ERROR", message, details)

    def remove(self, message: str, details: Any = None) -> RemoveError:
        return RemoveError(f"REMOVE_{self.entity}_ERROR", message, details)


REGION_ERRORS = ErrorCatalog("WEREDA", "WEREDAS")
GEOCONFIG_ERRORS = ErrorCatalog("GEOCONFIG", "GEOCONFIGS")
REQUEST_ERRORS = ErrorCatalog("REQUEST", "REQUESTS")

PERMISSION_DENIED_MESSAGE = "You Don't have enough permissions to complete this action"


def _validation_violations(errors: list) -> List[Dict[str, str]]:
    """Flatten request validation errors into ``{field, message}`` pairs."""
    violations = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        # Drop the "body" / "query" / "path" prefix
        field = ".".join(location[1:]) or (location[0] if location else "request")
        violations.append({"field": field, "message": f"{field}: {error.get('msg')}"})
    return violations


def typed_error_route(catalog: ErrorCatalog) -> Type[APIRoute]:
    """
    Build a route class whose request validation failures are raised as
    the typed error of the route's action in ``catalog``.

    Usage:
        router = APIRouter(route_class=typed_error_route(REGION_ERRORS))
    """

    class TypedErrorRoute(APIRoute):
        def action_error(self, method: str) -> Callable[..., GeospatialError]:
            if self.path.endswith("/create"):
                return catalog.creation
            if self.path.endswith("/paginate"):
                return catalog.collection
            if self.path.endswith("/search"):
                return catalog.search
            return {
                "GET": catalog.view,
                "PUT": catalog.update,
                "DELETE": catalog.remove,
            }.get(method, catalog.view)

        def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
            handler = super().get_route_handler()

            async def route_handler(request: Request) -> Response:
                try:
                    return await handler(request)
                except RequestValidationError as exc:
                    violations = _validation_violations(exc.errors())
                    raise self.action_error(request.method)(
                        "; ".join(violation["message"] for violation in violations),
                        details=violations,
                    ) from exc

            return route_handler

    return TypedErrorRoute


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    logger.error(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "error_type": exc.error_type,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    # Record exception in observability system
    record_exception(exc, request)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "type": exc.error_type,
                "message": exc.message,
                "details": exc.details,
                "path": request.url.path,
            }
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "status_code": exc.status_code,
                "path": request.url.path,
            }
        },
        headers=getattr(exc, "headers", None),
    )


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {}
        for key, value in error.items():
            if key == "ctx" and isinstance(value, dict):
                # Context may contain non-serializable objects like ValueError
                serialized_error[key] = {
                    ctx_key: str(ctx_value) if isinstance(ctx_value, Exception) else ctx_value
                    for ctx_key, ctx_value in value.items()
                }
            elif isinstance(value, Exception):
                serialized_error[key] = str(value)
            else:
                serialized_error[key] = value
        serialized.append(serialized_error)
    return serialized


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    serialized_errors = _serialize_validation_errors(exc.errors())

    logger.warning(
        f"Validation error: {serialized_errors}",
        extra={
            "path": request.url.path,
            "errors": serialized_errors,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "message": "Validation error",
                "details": serialized_errors,
                "path": request.url.path,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    # Record exception in observability system
    record_exception(exc, request)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "message": "Internal server error",
                "path": request.url.path,
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
