"""Core FastAPI application utilities shared across services."""

import logging
from typing import Any

import fastapi

import common.settings

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class HealthCheckFilter(logging.Filter):
    """Filter out health check requests from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress health check log entries."""
        return '/health' not in record.getMessage()


def configure_logging(level: str | int | None = None) -> None:
    """Set the root log level and keep health probes out of the access log.

    Args:
        level: Root logger level; defaults to the ``LOG_LEVEL`` setting.
    """
    logging.basicConfig(level=level or common.settings.LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger('uvicorn.access').addFilter(HealthCheckFilter())


# ---------------------------------------------------------------------------
# Health router
# ---------------------------------------------------------------------------

_health_router = fastapi.APIRouter()


@_health_router.api_route('/health', methods=['GET', 'HEAD'])
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {'status': 'healthy'}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(title: str, **kwargs: Any) -> fastapi.FastAPI:
    """Create a FastAPI app with health endpoint and logging configured.

    Additional keyword arguments are forwarded to FastAPI.__init__ (e.g. lifespan).
    """
    app = fastapi.FastAPI(title=title, **kwargs)
    configure_logging()
    app.include_router(_health_router)
    return app
