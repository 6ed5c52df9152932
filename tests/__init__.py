"""Flight status service test suite."""

from __future__ import annotations
