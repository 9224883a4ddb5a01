"""
Focusable node handle.

A FocusableNode stands in for one host UI element that can hold focus.
The host creates and destroys the element; the engine only keeps
references and asks for geometry when it needs to score a move.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from dpadnav.core.geometry import Rect

logger = logging.getLogger(__name__)

RectProvider = Callable[[], Optional[Rect]]


class FocusableNode:
    """
    Something that can receive focus.

    Geometry comes either from a fixed ``rect`` (updated by the host on
    layout) or from a ``rect_provider`` callable queried on every
    ``bounding_rect()`` call. Nodes compare by identity.
    """

    def __init__(
        self,
        rect: Optional[Rect] = None,
        debug_label: Optional[str] = None,
        enabled: bool = True,
        visible: bool = True,
        skip_traversal: bool = False,
        rect_provider: Optional[RectProvider] = None,
    ):
        self.rect = rect
        self.rect_provider = rect_provider
        self.debug_label = debug_label

        # State
        self.enabled = enabled
        self.visible = visible
        self.skip_traversal = skip_traversal
        self.focused = False
        self._alive = True

        # Maintained by the owning NodeRegistry and its RegionTable
        self._owner: Optional[object] = None
        self._region: Optional[str] = None

        # Callbacks
        self.on_select: Optional[Callable[[], None]] = None
        self.on_focus: Optional[Callable[[], None]] = None
        self.on_blur: Optional[Callable[[], None]] = None

    @property
    def alive(self) -> bool:
        """False once the node has been detached from its registry."""
        return self._alive

    @property
    def region(self) -> Optional[str]:
        """Region this node is registered in, if any."""
        return self._region

    @property
    def owner(self) -> Optional[object]:
        """Registry this node is registered with, if any."""
        return self._owner

    @property
    def can_receive_focus(self) -> bool:
        """True if navigation may target this node."""
        return self._alive and self.enabled and self.visible

    def detach(self) -> None:
        """Mark the node dead. Called once by the registry on unregistration."""
        if not self._alive:
            return
        self._alive = False
        self._owner = None
        self._region = None
        if self.focused:
            self.unfocus()

    def attach(self, owner: object) -> bool:
        """
        Bind the node to a registry.

        Returns:
            False if another registry already owns the node
        """
        if self._owner is not None and self._owner is not owner:
            return False
        self._owner = owner
        return True

    def release(self, owner: object) -> None:
        """Unbind from ``owner`` without killing the node."""
        if self._owner is owner:
            self._owner = None
            self._region = None

    def assign_region(self, region: Optional[str]) -> None:
        """Set the region tag. Called by the RegionTable holding the node."""
        self._region = region

    def set_enabled(self, enabled: bool) -> 'FocusableNode':
        """Set enabled state (fluent)."""
        self.enabled = enabled
        if not enabled:
            self.unfocus()
        return self

    def set_rect(self, rect: Rect) -> 'FocusableNode':
        """Set fixed geometry (fluent)."""
        self.rect = rect
        return self

    def bounding_rect(self) -> Optional[Rect]:
        """
        Query current geometry.

        Returns:
            The node's rect, or None if the node is dead, the provider
            failed, or the bounds are degenerate.
        """
        if not self._alive:
            return None

        rect = self.rect
        if self.rect_provider is not None:
            try:
                rect = self.rect_provider()
            except Exception as e:
                logger.debug(f"Rect query failed for {self!r}: {e}")
                return None

        if rect is None or not rect.is_valid():
            return None
        return rect

    # Focus notifications (driven by the focus host)

    def focus(self) -> bool:
        """
        Mark this node focused.

        Returns:
            True if focus was granted
        """
        if not self.can_receive_focus:
            return False

        self.focused = True

        if self.on_focus:
            self.on_focus()

        return True

    def unfocus(self) -> None:
        """Remove focus from this node."""
        if not self.focused:
            return

        self.focused = False

        if self.on_blur:
            self.on_blur()

    def __repr__(self) -> str:
        label = self.debug_label or hex(id(self))
        return f"{self.__class__.__name__}({label!r}, region={self._region!r})"
