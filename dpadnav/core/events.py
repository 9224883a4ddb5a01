"""
Typed event bus for navigation notifications.

Event types are Enum members, never strings. A navigator publishes on
the bus it was given; hosts subscribe to react to focus moves,
restorations and exhausted history without subclassing anything.

Usage:
    bus = EventBus()
    bus.subscribe(NavigationEvent.FOCUS_MOVED, on_focus_moved)

    navigator = DpadNavigator(config, event_bus=bus)
    navigator.navigate(Direction.DOWN)
    # on_focus_moved(event) receives event["node"], event["direction"]
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Optional
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class NavigationEvent(Enum):
    """Events published by a DpadNavigator."""
    # Registration
    NODE_REGISTERED = auto()
    NODE_UNREGISTERED = auto()

    # Traversal
    FOCUS_MOVED = auto()
    FOCUS_BLOCKED = auto()

    # History
    FOCUS_RECORDED = auto()
    FOCUS_RESTORED = auto()
    HISTORY_EXHAUSTED = auto()

    # Keys without a focus decision
    SELECT_PRESSED = auto()
    MENU_PRESSED = auto()


@dataclass
class Event:
    """
    One published notification.

    Attributes:
        type: Event type (Enum member)
        data: Keyword payload given to ``publish``
        consumed: Set by a handler to stop later handlers
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop propagation to lower priority handlers."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class _Subscription:
    priority: int
    target: Any  # handler, or a weak reference to it
    one_shot: bool = False
    weak: bool = False

    def resolve(self) -> Optional[EventHandler]:
        """The live handler, or None once a weak target was collected."""
        return self.target() if self.weak else self.target


class EventBus:
    """
    Publish/subscribe messaging.

    - Higher priority handlers run first, FIFO among equal priorities
    - Weak subscriptions disappear with their handler
    - One-shot handlers run once
    - A consumed event stops propagating
    - Events published from inside a handler are queued and delivered
      after the current dispatch finishes
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: deque[Event] = deque()
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: Event type to listen for
            handler: Callable taking the Event
            priority: Higher runs earlier (default 0)
            one_shot: Drop the handler after its first call
            weak: Hold the handler weakly (use False for lambdas and
                builtin methods such as ``list.append``)
        """
        if weak:
            target = WeakMethod(handler) if hasattr(handler, '__func__') else ref(handler)
        else:
            target = handler

        subscriptions = self._subscriptions.setdefault(event_type, [])
        position = next(
            (i for i, sub in enumerate(subscriptions) if priority > sub.priority),
            len(subscriptions),
        )
        subscriptions.insert(position, _Subscription(priority, target, one_shot, weak))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove every subscription of ``handler`` to ``event_type``."""
        subscriptions = self._subscriptions.get(event_type)
        if not subscriptions:
            return
        self._subscriptions[event_type] = [
            sub for sub in subscriptions if sub.resolve() != handler
        ]

    def has_subscribers(self, event_type: Enum) -> bool:
        """Check if anything still listens to an event type."""
        return any(sub.resolve() is not None for sub in self._subscriptions.get(event_type, ()))

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event (check ``consumed`` to see if a handler took it).
            When published from inside a handler, delivery happens after
            the running dispatch, so ``consumed`` is not yet meaningful.
        """
        event = Event(type=event_type, data=data)

        if self._dispatching:
            self._pending.append(event)
            return event

        self._dispatching = True
        try:
            self._deliver(event)
            while self._pending:
                self._deliver(self._pending.popleft())
        finally:
            self._dispatching = False
            self._pending.clear()

        return event

    def clear(self, event_type: Optional[Enum] = None) -> None:
        """Drop subscriptions for one event type, or for all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _deliver(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        finished = []
        for sub in list(subscriptions):
            handler = sub.resolve()
            if handler is None:
                finished.append(sub)
                continue

            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event.type}")

            if sub.one_shot:
                finished.append(sub)
            if event.consumed:
                break

        if finished:
            self._subscriptions[event.type] = [
                sub for sub in self._subscriptions.get(event.type, ()) if sub not in finished
            ]
