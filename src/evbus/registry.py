"""In-process event registry with execution-limited listeners.

Usage:
    registry = EventRegistry()

    def on_greet(message):
        print(message)

    registry.register("greet", on_greet)
    registry.register_once("greet", lambda message: print("first only"))

    registry.dispatch("greet", "hi")

Dispatch is synchronous. Each dispatch works on a snapshot of the listeners
selected when it starts: listeners registered by a callback fire from the next
dispatch on, and listeners detached by a callback are skipped if their turn
has not come yet.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import inspect
import logging
from types import MethodType
from typing import Any

from . import wildcards

LOGGER = logging.getLogger(__name__)

UNLIMITED = -1

Callback = Callable[..., Any]


@dataclass(eq=False)
class Listener:
    """A registered callback plus its execution bookkeeping."""

    callback: Callback
    executions: int = 0
    max_executions: int = UNLIMITED
    attached: bool = True

    @property
    def unlimited(self) -> bool:
        return self.max_executions < 0

    @property
    def exhausted(self) -> bool:
        return not self.unlimited and self.executions >= self.max_executions

    @property
    def remaining(self) -> int | None:
        if self.unlimited:
            return None
        return max(self.max_executions - self.executions, 0)


class EventRegistry:
    """Registry mapping event names to ordered listener sequences.

    Args:
        wildcards: Dispatching a name containing ``*`` that has no listeners of
            its own reaches every registered name matching it as a pattern.
        isolate_errors: Log and swallow callback exceptions instead of letting
            them abort the dispatch.
    """

    def __init__(self, *, wildcards: bool = True, isolate_errors: bool = False) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self.wildcards = wildcards
        self.isolate_errors = isolate_errors

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> EventRegistry:
        """Build a registry from the mapping returned by ``load_config()``."""
        dispatch = config.get("dispatch", {})
        return cls(
            wildcards=bool(dispatch.get("wildcards", True)),
            isolate_errors=bool(dispatch.get("isolate_errors", False)),
        )

    def register(
        self, event_name: str, callback: Callback, executions: int = UNLIMITED
    ) -> None:
        """Attach a callback to an event.

        Args:
            event_name: Name of the event
            callback: Callable invoked with the dispatch arguments
            executions: Max number of executions, ``-1`` for unlimited
        """
        listener = Listener(callback=callback, max_executions=executions)
        self._listeners.setdefault(event_name, []).append(listener)
        LOGGER.debug(
            "registry.listener.registered",
            extra={
                "event": "registry.listener.registered",
                "event_name": event_name,
                "max_executions": executions,
            },
        )

    def register_once(self, event_name: str, callback: Callback) -> None:
        """Attach a callback that fires at most once."""
        self.register(event_name, callback, 1)

    def register_exactly(
        self, executions: int, event_name: str, callback: Callback
    ) -> None:
        """Attach a callback that fires at most ``executions`` times."""
        self.register(event_name, callback, executions)

    def unregister_event(self, event_name: str) -> None:
        """Drop an event together with all of its listeners."""
        removed = self._listeners.pop(event_name, None)
        if removed is None:
            return
        for listener in removed:
            listener.attached = False
        LOGGER.debug(
            "registry.event.unregistered",
            extra={
                "event": "registry.event.unregistered",
                "event_name": event_name,
                "listeners": len(removed),
            },
        )

    def detach(self, event_name: str, callback: Callback) -> None:
        """Remove every listener of ``event_name`` whose callback is ``callback``."""
        listeners = self._listeners.get(event_name)
        if not listeners:
            return
        kept: list[Listener] = []
        for listener in listeners:
            if listener.callback is callback:
                listener.attached = False
            else:
                kept.append(listener)
        removed = len(listeners) - len(kept)
        if removed:
            self._listeners[event_name] = kept
            LOGGER.debug(
                "registry.listener.detached",
                extra={
                    "event": "registry.listener.detached",
                    "event_name": event_name,
                    "listeners": removed,
                },
            )

    def dispatch(self, event_name: str, *args: Any) -> None:
        """Invoke every listener of ``event_name`` with ``args``."""
        self.dispatch_with(event_name, None, *args)

    def dispatch_with(self, event_name: str, context: Any, *args: Any) -> None:
        """Invoke every listener of ``event_name`` with ``context`` as receiver.

        When ``context`` is not None each callback is bound to it, so a plain
        function declared as ``def handler(self, *args)`` sees the context as
        ``self``. Bound methods already have a receiver and are called with
        ``args`` only. Otherwise this behaves exactly like ``dispatch``.
        """
        targets = self._select(event_name)
        if not targets:
            LOGGER.debug(
                "registry.dispatch.no_listeners",
                extra={"event": "registry.dispatch.no_listeners", "event_name": event_name},
            )
            return

        for name, listener in targets:
            if not listener.attached:
                continue
            if listener.exhausted:
                # Zero limit, or spent by a nested dispatch of the same event.
                self._discard(name, listener)
                continue
            listener.executions += 1
            callback = listener.callback
            if context is not None and not inspect.ismethod(callback):
                callback = MethodType(callback, context)
            try:
                callback(*args)
            except Exception:
                if not self.isolate_errors:
                    raise
                LOGGER.exception(
                    "registry.callback.failed",
                    extra={"event": "registry.callback.failed", "event_name": name},
                )
            finally:
                if listener.exhausted:
                    self._discard(name, listener)

    def listeners(self, event_name: str) -> tuple[Listener, ...]:
        return tuple(self._listeners.get(event_name, ()))

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, ()))

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def event_names(self) -> list[str]:
        return list(self._listeners)

    def clear(self) -> None:
        """Drop every event and listener."""
        for listeners in self._listeners.values():
            for listener in listeners:
                listener.attached = False
        self._listeners.clear()

    def __contains__(self, event_name: object) -> bool:
        return event_name in self._listeners

    def __len__(self) -> int:
        return len(self._listeners)

    # Short names kept for callers used to emitter-style APIs.
    on = register
    once = register_once
    exactly = register_exactly
    off = unregister_event
    emit = dispatch
    emit_with = dispatch_with

    def _select(self, event_name: str) -> list[tuple[str, Listener]]:
        """Snapshot the listeners a dispatch of ``event_name`` should reach."""
        if event_name in self._listeners:
            return _pairs(event_name, self._listeners[event_name])
        if not self.wildcards or not wildcards.is_pattern(event_name):
            return []
        selected: list[tuple[str, Listener]] = []
        for name, listeners in self._listeners.items():
            if wildcards.matches(event_name, name):
                selected.extend(_pairs(name, listeners))
        return selected

    def _discard(self, event_name: str, listener: Listener) -> None:
        listener.attached = False
        listeners = self._listeners.get(event_name)
        if listeners is None:
            return
        for index, candidate in enumerate(listeners):
            if candidate is listener:
                del listeners[index]
                LOGGER.debug(
                    "registry.listener.exhausted",
                    extra={
                        "event": "registry.listener.exhausted",
                        "event_name": event_name,
                        "executions": listener.executions,
                    },
                )
                return


def _pairs(event_name: str, listeners: Iterable[Listener]) -> list[tuple[str, Listener]]:
    return [(event_name, listener) for listener in listeners]
