"""In-process publish/subscribe event registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import load_config
    from .exceptions import ConfigValidationError, EventBusError
    from .logging_utils import configure_logging
    from .registry import UNLIMITED, EventRegistry, Listener

__all__ = [
    "ConfigValidationError",
    "EventBusError",
    "EventRegistry",
    "Listener",
    "UNLIMITED",
    "configure_logging",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols so that importing the registry skips pydantic/structlog."""
    if name in {"EventRegistry", "Listener", "UNLIMITED"}:
        from . import registry

        return getattr(registry, name)
    if name in {"ConfigValidationError", "EventBusError"}:
        from . import exceptions

        return getattr(exceptions, name)
    if name == "load_config":
        from .config import load_config

        return load_config
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
