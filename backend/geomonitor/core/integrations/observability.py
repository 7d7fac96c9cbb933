"""
Observability hooks.
Failures are recorded as structured log records tagged with the service
identity and, when known, the acting principal.
"""

from fastapi import Request
import logging

from geomonitor.core.config import settings

logger = logging.getLogger(__name__)


def setup_observability() -> None:
    """
    Initialize observability for the service.

    TODO: Export traces through the OTLP endpoint once the collector is deployed.
    """
    logger.info(
        "Observability hooks ready",
        extra={
            "otel_endpoint": settings.OTEL_EXPORTER_OTLP_ENDPOINT,
            "service_name": settings.OTEL_SERVICE_NAME,
            "environment": settings.OTEL_ENVIRONMENT,
        },
    )


def record_exception(exc: Exception, request: Request) -> None:
    """Record a failed request together with the error type it surfaced as."""
    principal = getattr(request.state, "principal", None)
    logger.error(
        f"Request failed with {type(exc).__name__}",
        extra={
            "error_type": getattr(exc, "error_type", None),
            "exception_message": str(exc),
            "method": request.method,
            "path": request.url.path,
            "principal_id": str(principal.id) if principal else None,
            "service_name": settings.OTEL_SERVICE_NAME,
        },
    )
