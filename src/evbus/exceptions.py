"""Exception hierarchy for the evbus package."""

from __future__ import annotations


class EventBusError(RuntimeError):
    """Base class for all evbus errors."""


class ConfigValidationError(EventBusError):
    """Raised when configuration cannot be validated safely."""
