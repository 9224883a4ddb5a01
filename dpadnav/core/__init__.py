"""
Core primitives: directions, geometry and the event bus.
"""

from dpadnav.core.direction import Direction
from dpadnav.core.geometry import Rect
from dpadnav.core.events import EventBus, Event, NavigationEvent

__all__ = [
    "Direction",
    "Rect",
    "EventBus",
    "Event",
    "NavigationEvent",
]
