"""Date-reviving JSON body middleware.

JSON request bodies are parsed once here. Every string value shaped like
``DD-MM-YYYY`` becomes a :class:`datetime.date`, at any depth of nested
objects and arrays, and the result is stored on ``request.state.revived_body``
for the route handlers.
"""

from __future__ import annotations

from datetime import date, datetime
import json
import logging
import re
from typing import Any

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$")
DATE_FORMAT = "%d-%m-%Y"

BODY_METHODS = {"POST", "PUT", "PATCH"}


def revive_date(value: str) -> date | str:
    """Parse ``value`` as ``DD-MM-YYYY``, leaving it untouched otherwise."""
    if not DATE_PATTERN.match(value):
        return value
    try:
        return datetime.strptime(value, DATE_FORMAT).date()  # noqa: DTZ007
    except ValueError:
        # Shaped like a date but not a calendar day (e.g. 31-02-2023)
        return value


def revive_dates(value: Any) -> Any:
    """Recursively revive date strings inside decoded JSON."""
    if isinstance(value, str):
        return revive_date(value)
    if isinstance(value, dict):
        return {key: revive_dates(item) for key, item in value.items()}
    if isinstance(value, list):
        return [revive_dates(item) for item in value]
    return value


class DateRevivingMiddleware(BaseHTTPMiddleware):
    """Parses JSON request bodies and revives ``DD-MM-YYYY`` strings as dates."""

    def __init__(self, app: ASGIApp, max_request_size: int = 1024 * 1024) -> None:
        super().__init__(app)
        self.max_request_size = max_request_size

    def _too_large(self, size: int) -> JSONResponse:
        logger.warning(
            "Request body of %d bytes exceeds the %d byte limit",
            size,
            self.max_request_size,
        )
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={
                "error": "Request payload too large",
                "max_size_bytes": self.max_request_size,
            },
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        content_type = request.headers.get("content-type", "").lower()
        if request.method not in BODY_METHODS or "application/json" not in content_type:
            return await call_next(request)

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_request_size:
                return self._too_large(int(content_length))

        body = await request.body()
        if len(body) > self.max_request_size:
            return self._too_large(len(body))

        if body:
            try:
                decoded = json.loads(body)
            except (json.JSONDecodeError, UnicodeDecodeError):
                logger.info("Rejected malformed JSON body on %s", request.url.path)
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"error": "Malformed JSON body"},
                )
            request.state.revived_body = revive_dates(decoded)

        return await call_next(request)
