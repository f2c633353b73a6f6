"""
boardstore.events  ──  Event-based decorators for Record lifecycle hooks
"""

from __future__ import annotations
import logging
from typing import Callable, Type, Set, Dict, TYPE_CHECKING
from collections import defaultdict

if TYPE_CHECKING:
    from .core.record import Record

LOGGER = logging.getLogger(__name__)

EVENT_TYPES = ("create", "update", "delete")


class EventRegistry:
    """Central registry for event handlers"""

    def __init__(self):
        # Maps event type -> record class name -> set of handlers
        self._handlers: Dict[str, Dict[str, Set[Callable]]] = {
            event_type: defaultdict(set) for event_type in EVENT_TYPES
        }

    def register(
        self,
        event_type: str,
        record_classes: tuple[Type[Record], ...],
        handler: Callable,
    ) -> None:
        """Register a handler for specific record classes"""
        if event_type not in self._handlers:
            raise ValueError(f"Unknown event type {event_type!r}")
        for cls in record_classes:
            self._handlers[event_type][cls.__name__].add(handler)

    def emit(self, event_type: str, instance: Record) -> None:
        """Emit event to all matching handlers"""
        handlers = set()

        # Also check parent classes
        for cls in instance.__class__.__mro__:
            class_name = cls.__name__
            if class_name in self._handlers[event_type]:
                handlers.update(self._handlers[event_type][class_name])

        # hook failures are logged; the committed write and its result stand
        for handler in handlers:
            try:
                handler(instance)
            except Exception:
                LOGGER.exception(
                    "%s hook %s failed for %s id=%s",
                    event_type,
                    getattr(handler, "__name__", handler),
                    instance.__class__.__name__,
                    getattr(instance, "id", None),
                )

    def clear(self) -> None:
        for handlers in self._handlers.values():
            handlers.clear()


# Global registry instance
_registry = EventRegistry()


def default_registry() -> EventRegistry:
    return _registry


class OnDecorator:
    """Namespace for event decorators"""

    def __init__(self, registry: EventRegistry):
        self.registry = registry

    def _decorator(self, event_type: str, record_classes: tuple) -> Callable:
        def decorator(func: Callable) -> Callable:
            self.registry.register(event_type, record_classes, func)
            return func

        return decorator

    def create(self, *record_classes: Type[Record]) -> Callable:
        """Decorator for handling record creation events"""
        return self._decorator("create", record_classes)

    def update(self, *record_classes: Type[Record]) -> Callable:
        """Decorator for handling record update events (unlist included)"""
        return self._decorator("update", record_classes)

    def delete(self, *record_classes: Type[Record]) -> Callable:
        """Decorator for handling record deletion events"""
        return self._decorator("delete", record_classes)


# Export the decorator interface
on = OnDecorator(_registry)
