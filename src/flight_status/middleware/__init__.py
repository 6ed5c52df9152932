"""HTTP middleware for the flight status service."""

from flight_status.middleware.date_reviver import (
    DateRevivingMiddleware,
    revive_date,
    revive_dates,
)

__all__ = [
    "DateRevivingMiddleware",
    "revive_date",
    "revive_dates",
]
