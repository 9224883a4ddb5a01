"""
Focus host: who holds focus right now.

The engine decides *where* focus should go; the host applies it. Any
object with a ``focused`` attribute, a ``request_focus(node)`` method
and an ``on_focus_changed`` callback slot can act as the host.
FocusManager is the in-memory default used when the host UI layer does
not bring its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from dpadnav.focus.node import FocusableNode


FocusChangedCallback = Callable[[Optional['FocusableNode'], Optional['FocusableNode']], None]


class FocusHost(Protocol):
    """Interface the navigator needs from the host UI layer."""

    on_focus_changed: Optional[FocusChangedCallback]

    @property
    def focused(self) -> Optional['FocusableNode']:
        ...

    def request_focus(self, node: Optional['FocusableNode']) -> bool:
        ...


class FocusManager:
    """
    Tracks the focused node and applies focus requests.

    A request for a node that cannot receive focus is refused, which is
    how callers observe a failed move.
    """

    def __init__(self):
        self._focused: Optional[FocusableNode] = None

        # Callbacks
        self.on_focus_changed: Optional[FocusChangedCallback] = None

    @property
    def focused(self) -> Optional['FocusableNode']:
        """Get currently focused node (None once it has died)."""
        if self._focused is not None and not self._focused.alive:
            self._focused = None
        return self._focused

    def request_focus(self, node: Optional['FocusableNode']) -> bool:
        """
        Move focus to a node.

        Args:
            node: Node to focus, or None to clear focus

        Returns:
            True if ``node`` holds focus afterwards
        """
        if node is not None and not node.can_receive_focus:
            return False

        if node is self._focused:
            return node is not None

        old_focus = self._focused

        if old_focus is not None:
            old_focus.unfocus()

        self._focused = node
        if node is not None:
            node.focus()

        if self.on_focus_changed:
            self.on_focus_changed(old_focus, node)

        return node is not None

    def clear_focus(self) -> None:
        """Clear all focus."""
        self.request_focus(None)
