"""HTTP API routers."""

from flight_status.api.health import router as health_router

__all__ = ["health_router"]
