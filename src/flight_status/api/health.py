"""Health endpoint polled by the discovery registry.

Always answers ``200 UP`` once the listener accepts connections, whatever the
bootstrap stage.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_class=PlainTextResponse)
async def health_check() -> str:
    """Registry health check."""
    return "UP"
