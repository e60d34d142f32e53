"""
Event Bus - Shared channel for lifecycle and notification events.

This module implements:
1. EventBus: process-wide publish/subscribe channel (lifecycle, toasts)
2. EventTarget: per-node listener registry (container-scoped requests)

Both share the same dispatch rules:
- Priority-based execution (higher priority = earlier execution)
- Registration order as tie-breaker
- Synchronous, in-order delivery on the caller's thread
- Closed set of event kinds (EventKind members only)
"""

import inspect
import warnings
from collections.abc import Callable
from dataclasses import dataclass

from pluginhost.core.box import Box
from pluginhost.events import EventKind


class EventBusError(Exception):
    """Base exception for event bus errors."""

    pass


class RegistrationError(EventBusError):
    """Raised when handler registration fails."""

    pass


class DispatchError(EventBusError):
    """Raised when an event cannot be dispatched."""

    pass


def _wants_kind(callback: Callable) -> bool:
    """Check whether a callback takes the event kind as its first parameter."""
    try:
        params = list(inspect.signature(callback).parameters.keys())
    except (TypeError, ValueError):
        return False
    return len(params) >= 2 and params[0] == "kind"


@dataclass
class Handler:
    """
    Represents a registered event handler.

    Attributes:
        callback: The handler function
        priority: Higher priority executes first
        registration_order: Tie-breaker for same priority (lower = earlier)
        requires_kind: Whether handler expects 'kind' parameter
    """

    callback: Callable
    priority: int
    registration_order: int
    requires_kind: bool = False

    def __call__(self, kind: EventKind, content: Box) -> None:
        """Execute the handler."""
        if self.requires_kind:
            self.callback(kind, content)
        else:
            self.callback(content)


@dataclass(frozen=True)
class Subscription:
    """Handle returned by subscribe(); pass it back to unsubscribe()."""

    kind: EventKind
    registration_order: int


class _Registry:
    """Handler storage shared by EventBus and EventTarget."""

    def __init__(self, isolate_errors: bool = False):
        # event kind -> list of handlers
        self._routes: dict[EventKind, list[Handler]] = {}

        # Registration order counter for tie-breaking
        self._registration_counter = 0

        # When set, a failing handler warns instead of aborting the dispatch
        self.isolate_errors = isolate_errors

    def _next_registration_order(self) -> int:
        """Get next registration order number."""
        order = self._registration_counter
        self._registration_counter += 1
        return order

    def _sort_handlers(self, handlers: list[Handler]) -> list[Handler]:
        """
        Sort handlers by priority (descending) and registration order (ascending).
        """
        return sorted(handlers, key=lambda h: (-h.priority, h.registration_order))

    def _register(self, kind: EventKind, callback: Callable, priority: int) -> Subscription:
        if not isinstance(kind, EventKind):
            raise RegistrationError(f"Unknown event kind: {kind!r}")
        if not callable(callback):
            raise RegistrationError(f"Handler for {kind.value} is not callable")

        handler = Handler(
            callback=callback,
            priority=priority,
            registration_order=self._next_registration_order(),
            requires_kind=_wants_kind(callback),
        )
        self._routes.setdefault(kind, []).append(handler)
        return Subscription(kind=kind, registration_order=handler.registration_order)

    def _unregister(self, subscription: Subscription) -> None:
        handlers = self._routes.get(subscription.kind)
        if not handlers:
            return
        self._routes[subscription.kind] = [
            h for h in handlers
            if h.registration_order != subscription.registration_order
        ]

    def _unregister_callback(self, kind: EventKind, callback: Callable) -> None:
        handlers = self._routes.get(kind)
        if not handlers:
            return
        self._routes[kind] = [h for h in handlers if h.callback != callback]

    def _handlers_for(self, kind: EventKind) -> list[Handler]:
        return self._sort_handlers(self._routes.get(kind, []))

    def _count(self, kind: EventKind) -> int:
        return len(self._routes.get(kind, []))

    def _deliver(self, kind: EventKind, content: Box | None, label: str) -> None:
        if not isinstance(kind, EventKind):
            raise DispatchError(f"Unknown event kind: {kind!r}")
        if content is None:
            content = Box.empty()

        # Snapshot the handler list: handlers may (un)subscribe while running
        for handler in self._handlers_for(kind):
            if not self.isolate_errors:
                handler(kind, content)
                continue
            try:
                handler(kind, content)
            except Exception as e:
                warnings.warn(
                    f"{label} handler failed for '{kind.value}': {e}",
                    RuntimeWarning,
                    stacklevel=3,
                )

    def _clear(self) -> None:
        self._routes.clear()


class EventBus(_Registry):
    """
    Shared publish/subscribe channel.

    Handlers run synchronously inside dispatch(), one at a time, in priority
    order. Unless isolate_errors is set, the first handler exception
    propagates out of dispatch() and later handlers do not run.
    """

    def subscribe(
        self, kind: EventKind, callback: Callable, priority: int = 0
    ) -> Subscription:
        """
        Register a handler for an event kind.

        Args:
            kind: Event kind to listen for
            callback: Handler taking (content: Box) or (kind, content: Box)
            priority: Execution priority (higher = earlier)

        Returns:
            Subscription handle for unsubscribe()

        Raises:
            RegistrationError: If kind is not an EventKind or callback is not callable
        """
        return self._register(kind, callback, priority)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a handler. Unknown subscriptions are ignored."""
        self._unregister(subscription)

    def subscriber_count(self, kind: EventKind) -> int:
        return self._count(kind)

    def dispatch(self, kind: EventKind, content: Box | None = None) -> None:
        """
        Dispatch an event to every subscriber of its kind.

        Args:
            kind: The event kind
            content: The event payload (defaults to an empty Box)

        Raises:
            DispatchError: If kind is not an EventKind
        """
        self._deliver(kind, content, "Event")

    def clear(self) -> None:
        """Drop every subscription."""
        self._clear()


class EventTarget(_Registry):
    """
    Listener registry attached to a single node.

    Mirrors the DOM's addEventListener/dispatchEvent pair. Listeners live and
    die with the node that owns the registry.
    """

    def add_event_listener(
        self, kind: EventKind, callback: Callable, priority: int = 0
    ) -> Subscription:
        return self._register(kind, callback, priority)

    def remove_event_listener(self, kind: EventKind, callback: Callable) -> None:
        self._unregister_callback(kind, callback)

    def listener_count(self, kind: EventKind) -> int:
        return self._count(kind)

    def dispatch_event(self, kind: EventKind, content: Box | None = None) -> None:
        self._deliver(kind, content, "Listener")

    def clear_listeners(self) -> None:
        self._clear()


# Global event bus instance
_global_event_bus = EventBus()


def default_bus() -> EventBus:
    """Return the process-wide event bus."""
    return _global_event_bus


# Public API functions
def consumer(kind: EventKind, priority: int = 0):
    """
    Decorator to register a consumer on the process-wide bus.

    Example:
        @pluginhost.event.consumer(EventKind.TOAST, priority=10)
        def show_toast(content: Box):
            notifier.show(content.into()["message"])
    """

    def decorator(func: Callable) -> Callable:
        _global_event_bus.subscribe(kind, func, priority)
        return func

    return decorator


def start(kind: EventKind, content: Box | None = None) -> None:
    """
    Dispatch an event on the process-wide bus.

    Example:
        pluginhost.event.start(EventKind.SEARCH_UPDATED)
    """
    _global_event_bus.dispatch(kind, content)
