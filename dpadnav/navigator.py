"""
DpadNavigator - one navigation root.

Owns every piece of mutable navigation state for a root: node registry,
region table, rule table, focus history. Nested or parallel roots use
separate navigators and share nothing.

The host UI layer:
- registers/unregisters nodes as its widgets come and go
- forwards directional presses to ``navigate()`` (or asks ``decide()``
  and applies the result itself)
- forwards the back key to ``navigate_back()``
- reports focus changes through its focus host, which the navigator
  listens to in order to record history
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple, Union

from dpadnav.config import NavigatorConfig
from dpadnav.core.direction import Direction
from dpadnav.core.events import EventBus, NavigationEvent
from dpadnav.focus.history import FocusHistory, FocusHistoryEntry
from dpadnav.focus.manager import FocusHost, FocusManager
from dpadnav.focus.node import FocusableNode
from dpadnav.focus.policy import RegionNavigationPolicy
from dpadnav.focus.registry import NodeRegistry
from dpadnav.focus.rules import NavigationRule, RuleTable
from dpadnav.focus.scoring import reading_order

logger = logging.getLogger(__name__)

# on_navigate_back(entry, remaining_history) -> True if handled
NavigateBackCallback = Callable[[Optional[FocusHistoryEntry], Sequence[FocusHistoryEntry]], bool]


class DpadNavigator:
    """
    D-pad focus navigation for one root.

    Usage:
        navigator = DpadNavigator(config, on_back_pressed=close_screen)

        navigator.register_node(tab, region="tabs")
        navigator.register_node(card, region="content", is_entry_point=True)

        navigator.navigate(Direction.DOWN)
        navigator.navigate_back()
    """

    def __init__(
        self,
        config: Optional[NavigatorConfig] = None,
        focus_host: Optional[FocusHost] = None,
        event_bus: Optional[EventBus] = None,
        on_back_pressed: Optional[Callable[[], None]] = None,
        on_navigate_back: Optional[NavigateBackCallback] = None,
        on_menu_pressed: Optional[Callable[[], None]] = None,
        on_restore: Optional[Callable[[FocusableNode], None]] = None,
    ):
        self.config = config or NavigatorConfig()
        self.event_bus = event_bus

        # Callbacks
        self.on_back_pressed = on_back_pressed
        self.on_navigate_back = on_navigate_back
        self.on_menu_pressed = on_menu_pressed
        self.on_restore = on_restore

        # Navigation state
        self.registry = NodeRegistry()
        self.history: Optional[FocusHistory] = (
            FocusHistory(self.config.max_history) if self.config.focus_memory else None
        )
        self._build_policy()

        self._current_route: Optional[str] = None

        # Listen to the host, keeping any callback it already had
        self.focus_host: FocusHost = focus_host if focus_host is not None else FocusManager()
        self._host_callback = self.focus_host.on_focus_changed
        self.focus_host.on_focus_changed = self._on_focus_changed

        logger.debug(
            f"DpadNavigator created: {len(self.rule_table)} rules, "
            f"memory={'on' if self.history is not None else 'off'}"
        )

    # Properties

    @property
    def focused(self) -> Optional[FocusableNode]:
        """Node currently holding focus."""
        return self.focus_host.focused

    @property
    def current_route(self) -> Optional[str]:
        """Route recorded with new history entries."""
        return self._current_route

    @current_route.setter
    def current_route(self, value: Optional[str]) -> None:
        self._current_route = value

    # Registration

    def register_node(
        self,
        node: FocusableNode,
        region: Optional[str] = None,
        is_entry_point: bool = False,
        priority: int = 0,
        debug_label: Optional[str] = None,
    ) -> bool:
        """
        Make a node navigable.

        Args:
            node: Node to register
            region: Region to tag it with
            is_entry_point: Use as an entry point of ``region``
            priority: Entry point priority (higher = preferred)
            debug_label: Label for diagnostics

        Returns:
            True if the node was registered
        """
        if not self.registry.register(
            node,
            region=region,
            is_entry_point=is_entry_point,
            priority=priority,
            debug_label=debug_label,
        ):
            return False

        self._publish(NavigationEvent.NODE_REGISTERED, node=node, region=region)
        return True

    def unregister_node(self, node: FocusableNode) -> bool:
        """Remove a node. Its history entries go stale."""
        region = self.registry.region_of(node)
        if not self.registry.unregister(node):
            return False

        self._publish(NavigationEvent.NODE_UNREGISTERED, node=node, region=region)
        return True

    # Directional navigation

    def decide(
        self,
        direction: Union[Direction, str],
        current: Optional[FocusableNode] = None,
    ) -> Optional[FocusableNode]:
        """
        Decide where a directional press should move focus.

        Args:
            direction: Direction pressed
            current: Node to move from (defaults to the focused node)

        Returns:
            Target node, or None if focus should stay put
        """
        if current is None:
            current = self.focused
        if current is None:
            return None
        return self.policy.decide(current, Direction(direction))

    def navigate(self, direction: Union[Direction, str]) -> bool:
        """
        Move focus in a direction.

        With nothing focused, restores focus instead.

        Returns:
            True if focus moved
        """
        direction = Direction(direction)
        current = self.focused
        if current is None:
            return self.restore_focus() is not None

        target = self.policy.decide(current, direction)
        if target is None or not self.focus_host.request_focus(target):
            logger.debug(f"No move {direction} from {current!r}")
            self._publish(NavigationEvent.FOCUS_BLOCKED, node=current, direction=direction)
            return False

        self._publish(
            NavigationEvent.FOCUS_MOVED,
            node=target,
            previous=current,
            direction=direction,
        )
        return True

    def navigate_next(self) -> bool:
        """Move focus to the next node in reading order (wraps)."""
        return self._navigate_sequential(1)

    def navigate_previous(self) -> bool:
        """Move focus to the previous node in reading order (wraps)."""
        return self._navigate_sequential(-1)

    def _navigate_sequential(self, step: int) -> bool:
        current = self.focused
        if current is None:
            return self.restore_focus() is not None

        order = reading_order(self.registry.all_live())
        if not order:
            return False

        if current in order:
            index = (order.index(current) + step) % len(order)
        else:
            index = 0 if step > 0 else len(order) - 1

        target = order[index]
        if target is current or not self.focus_host.request_focus(target):
            return False

        self._publish(NavigationEvent.FOCUS_MOVED, node=target, previous=current, direction=None)
        return True

    def select_current(self) -> bool:
        """
        Activate the focused node.

        Returns:
            True if the node had a select handler
        """
        current = self.focused
        if current is None:
            self.restore_focus()
            return False

        if current.on_select is None:
            return False

        current.on_select()
        self._publish(NavigationEvent.SELECT_PRESSED, node=current)
        return True

    def press_menu(self) -> None:
        """Forward a menu press to the host."""
        if self.on_menu_pressed:
            self.on_menu_pressed()
        self._publish(NavigationEvent.MENU_PRESSED, node=self.focused)

    # Focus memory

    def record_focus(
        self,
        node: FocusableNode,
        region: Optional[str] = None,
        route: Optional[str] = None,
    ) -> Optional[FocusHistoryEntry]:
        """
        Record that a node received focus.

        Called automatically for focus changes reported by the focus
        host. A node just restored by ``navigate_back()`` is skipped
        once.

        Args:
            node: Node that received focus
            region: Region tag (defaults to the node's registered region)
            route: Route tag (defaults to ``current_route``, then
                ``config.default_route``)

        Returns:
            The new entry, or None if nothing was recorded
        """
        if self.history is None:
            return None

        last_popped = self.history.last_popped
        if last_popped is not None and last_popped.node is node:
            self.history.clear_last_popped()
            logger.debug(f"Skipping echo of restored focus {node!r}")
            return None

        if region is None:
            region = self.registry.region_of(node)
        if not self.config.should_track_region(region):
            return None

        entry = FocusHistoryEntry(
            node=node,
            region=region,
            route=route or self._current_route or self.config.default_route,
            debug_label=node.debug_label,
        )
        if not self.history.push(entry):
            return None

        self._publish(NavigationEvent.FOCUS_RECORDED, entry=entry)
        return entry

    def navigate_back(self) -> Optional[FocusableNode]:
        """
        Return focus to where it was before the current node.

        Falls back to ``on_back_pressed`` when memory is off, history is
        exhausted, or the restored node refuses focus.

        Returns:
            The node focus was restored to, or None
        """
        if self.history is None:
            self._back_pressed()
            return None

        history = self.history
        history.remove_stale()

        entry = history.pop()
        current = self.focused
        if entry is not None and current is not None and entry.node is current:
            entry = history.pop()

        if self.on_navigate_back is not None:
            if self.on_navigate_back(entry, history.entries()):
                return entry.node if entry is not None else None
            self._back_pressed()
            return None

        if entry is None or not entry.is_valid:
            logger.debug("No focus history to go back to")
            self._publish(NavigationEvent.HISTORY_EXHAUSTED)
            self._back_pressed()
            return None

        if not self.focus_host.request_focus(entry.node):
            logger.debug(f"Restoring {entry!r} failed")
            self._back_pressed()
            return None

        self._publish(NavigationEvent.FOCUS_RESTORED, node=entry.node, entry=entry)
        if self.on_restore:
            self.on_restore(entry.node)
        return entry.node

    def restore_focus(self) -> Optional[FocusableNode]:
        """
        Give focus back to something when nothing holds it.

        Tries the top of the history first, then the first live node in
        reading order.

        Returns:
            The node that received focus, or None
        """
        if self.focused is not None:
            return None

        if self.history is not None:
            self.history.remove_stale()
            entry = self.history.peek_current()
            if entry is not None and self.focus_host.request_focus(entry.node):
                self._publish(NavigationEvent.FOCUS_RESTORED, node=entry.node, entry=entry)
                return entry.node

        return self.focus_first_available()

    def focus_first_available(self) -> Optional[FocusableNode]:
        """Focus the first live node in reading order."""
        for node in reading_order(self.registry.all_live()):
            if self.focus_host.request_focus(node):
                return node
        return None

    # Introspection and maintenance

    def history_snapshot(self) -> Tuple[FocusHistoryEntry, ...]:
        """Focus history, oldest first (empty when memory is off)."""
        if self.history is None:
            return ()
        return self.history.entries()

    def region_members(self, region: str) -> List[FocusableNode]:
        """Live members of a region, in registration order."""
        return self.registry.all_live_in(region)

    def expanded_rules(self) -> List[NavigationRule]:
        """Explicit rules and their derived mirrors."""
        return self.rule_table.expanded_rules()

    def configure(self, config: NavigatorConfig) -> None:
        """
        Swap in a new configuration while the root is running.

        Rebuilds the rule table and policy. Turning focus memory on
        starts an empty history; turning it off drops the history.
        Registered nodes are kept.
        """
        self.config = config

        if not config.focus_memory:
            if self.history is not None:
                self.history.clear()
            self.history = None
        elif self.history is None:
            self.history = FocusHistory(config.max_history)
        else:
            self.history.set_max_size(config.max_history)

        self._build_policy()
        logger.debug(
            f"DpadNavigator reconfigured: {len(self.rule_table)} rules, "
            f"enabled={config.enabled}, memory={'on' if self.history is not None else 'off'}"
        )

    def set_max_history(self, size: int) -> None:
        """Change history capacity (raises ValidationError if negative)."""
        self.configure(NavigatorConfig(**{**dict(self.config), "max_history": size}))

    def cleanup(self) -> int:
        """
        Drop stale nodes and history entries.

        Returns:
            Number of entries removed
        """
        removed = self.registry.cleanup()
        if self.history is not None:
            removed += self.history.remove_stale()
        return removed

    def close(self) -> None:
        """Tear the root down and stop listening to the focus host."""
        if self.focus_host.on_focus_changed == self._on_focus_changed:
            self.focus_host.on_focus_changed = self._host_callback
        self.registry.clear()
        if self.history is not None:
            self.history.clear()
        logger.debug("DpadNavigator closed")

    # Internal

    def _on_focus_changed(
        self,
        old: Optional[FocusableNode],
        new: Optional[FocusableNode],
    ) -> None:
        if self._host_callback:
            self._host_callback(old, new)

        if new is not None and new in self.registry:
            self.record_focus(new)

    def _build_policy(self) -> None:
        self.rule_table = RuleTable(self.config.rules, enabled=self.config.enabled)
        self.policy = RegionNavigationPolicy(
            self.registry,
            self.rule_table,
            history=self.history,
            enabled=self.config.enabled,
            default_strategy=self.config.default_strategy,
        )

    def _back_pressed(self) -> None:
        if self.on_back_pressed:
            self.on_back_pressed()

    def _publish(self, event_type: NavigationEvent, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event_type, **data)
