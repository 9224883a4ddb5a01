"""
Focus history.

Bounded stack of focus events. Backs the MEMORY strategy (return to the
last node used in a region) and back navigation (return to the node
focused before the current one).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from dpadnav.focus.node import FocusableNode

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 20


@dataclass(frozen=True, eq=False)
class FocusHistoryEntry:
    """
    One recorded focus event.

    Attributes:
        node: The node that received focus
        region: Region tag at the time of recording
        route: Route/screen identifier at the time of recording
        timestamp: Wall-clock time of recording (seconds)
        debug_label: Label for diagnostics
    """
    node: 'FocusableNode'
    region: Optional[str] = None
    route: Optional[str] = None
    debug_label: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

    @property
    def is_valid(self) -> bool:
        """Whether the recorded node can still take focus."""
        return self.node.can_receive_focus

    def __repr__(self) -> str:
        label = self.debug_label or self.node.debug_label or hex(id(self.node))
        status = "valid" if self.is_valid else "stale"
        return f"FocusHistoryEntry({label!r}, region={self.region!r}, route={self.route!r}, {status})"


class FocusHistory:
    """
    Bounded focus stack.

    - The oldest entry is evicted once ``max_size`` is exceeded
    - Two consecutive entries never reference the same node
    - ``pop()`` remembers its result as ``last_popped`` so the caller
      can ignore the focus notification the restored node fires
    """

    def __init__(self, max_size: int = DEFAULT_MAX_HISTORY):
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {max_size}")
        self._stack: List[FocusHistoryEntry] = []
        self._max_size = max_size
        self._last_popped: Optional[FocusHistoryEntry] = None

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def last_popped(self) -> Optional[FocusHistoryEntry]:
        """Entry returned by the most recent ``pop()``, until the next distinct push."""
        return self._last_popped

    @property
    def is_empty(self) -> bool:
        return not self._stack

    def push(self, entry: FocusHistoryEntry) -> bool:
        """
        Record a focus event.

        Returns:
            True if the entry was added (False if the top entry already
            references the same node or the history has no capacity)
        """
        if self._max_size == 0:
            return False
        if self._stack and self._stack[-1].node is entry.node:
            return False

        self._stack.append(entry)
        self._last_popped = None

        if len(self._stack) > self._max_size:
            del self._stack[:len(self._stack) - self._max_size]

        return True

    def pop(self) -> Optional[FocusHistoryEntry]:
        """Remove and return the top entry, or None if empty."""
        self._last_popped = self._stack.pop() if self._stack else None
        return self._last_popped

    def clear_last_popped(self) -> None:
        """Forget the last popped entry (after its echo has been suppressed)."""
        self._last_popped = None

    def peek_current(self) -> Optional[FocusHistoryEntry]:
        """Top entry, or None."""
        return self._stack[-1] if self._stack else None

    def peek_previous(self) -> Optional[FocusHistoryEntry]:
        """Entry below the top, or None."""
        return self._stack[-2] if len(self._stack) >= 2 else None

    def last_focus_in_region(self, region: str) -> Optional[FocusHistoryEntry]:
        """Most recent entry recorded in a region."""
        for entry in reversed(self._stack):
            if entry.region == region:
                return entry
        return None

    def last_focus_in_route(self, route: str) -> Optional[FocusHistoryEntry]:
        """Most recent entry recorded on a route."""
        for entry in reversed(self._stack):
            if entry.route == route:
                return entry
        return None

    def remove_stale(self) -> int:
        """
        Drop entries whose node can no longer take focus.

        Returns:
            Number of entries removed
        """
        before = len(self._stack)
        if before == 0:
            return 0

        kept: List[FocusHistoryEntry] = []
        for entry in self._stack:
            if not entry.is_valid:
                continue
            # Dropping A in [B, A, B] must not leave B twice in a row
            if kept and kept[-1].node is entry.node:
                kept[-1] = entry
            else:
                kept.append(entry)

        self._stack = kept
        removed = before - len(self._stack)
        if removed:
            logger.debug(f"Removed {removed} stale history entries")
        return removed

    def set_max_size(self, size: int) -> None:
        """Change capacity, evicting the oldest entries if over it."""
        if size < 0:
            raise ValueError(f"max_size must be >= 0, got {size}")
        self._max_size = size
        if len(self._stack) > size:
            del self._stack[:len(self._stack) - size]

    def entries(self) -> Tuple[FocusHistoryEntry, ...]:
        """Snapshot of the stack, oldest first."""
        return tuple(self._stack)

    def clear(self) -> None:
        """Remove every entry."""
        self._stack.clear()
        self._last_popped = None

    def __len__(self) -> int:
        return len(self._stack)
