"""
Region table: named groups of focusable nodes.

Regions are logical areas of a screen (tab bar, sidebar, content grid).
Each region keeps its members in registration order, which is the
deterministic fallback order for entry points and tie-breaking, plus a
priority-ranked list of entry points used when focus enters the region
from outside.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

if TYPE_CHECKING:
    from dpadnav.focus.node import FocusableNode

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class RegionEntryPoint:
    """Designated node a region hands focus to when entered from outside."""
    region: str
    node: 'FocusableNode'
    priority: int = 0
    debug_label: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """Whether the entry point can still take focus."""
        return self.node.can_receive_focus

    def __repr__(self) -> str:
        return f"RegionEntryPoint({self.region}, priority={self.priority}, label={self.debug_label!r})"


def _default_is_live(node: 'FocusableNode') -> bool:
    return node.can_receive_focus


class RegionTable:
    """
    Region name -> ordered members + prioritized entry points.

    A node belongs to at most one region. Registering it into another
    region moves it. Reads filter out non-live nodes; ``cleanup()``
    drops them for good.
    """

    def __init__(self, is_live: Callable[['FocusableNode'], bool] = _default_is_live):
        self._is_live = is_live

        # Dicts used as insertion-ordered sets
        self._members: Dict[str, Dict['FocusableNode', None]] = {}
        self._entry_points: Dict[str, List[RegionEntryPoint]] = {}
        self._node_region: Dict['FocusableNode', str] = {}

    def register_node(
        self,
        region: str,
        node: 'FocusableNode',
        is_entry_point: bool = False,
        priority: int = 0,
        debug_label: Optional[str] = None,
    ) -> None:
        """
        Add a node to a region.

        Re-adding a member keeps its position. Re-registering it as an
        entry point updates the priority of the existing entry.

        Args:
            region: Region identifier
            node: Node to add
            is_entry_point: Also register as an entry point
            priority: Entry point priority (higher = preferred)
            debug_label: Label for diagnostics
        """
        previous = self._node_region.get(node)
        if previous is not None and previous != region:
            logger.debug(f"Moving {node!r} from region {previous!r} to {region!r}")
            self.remove_node(node)

        self._members.setdefault(region, {})[node] = None
        self._node_region[node] = region
        node.assign_region(region)

        if is_entry_point:
            entries = self._entry_points.setdefault(region, [])
            for entry in entries:
                if entry.node is node:
                    entry.priority = priority
                    if debug_label is not None:
                        entry.debug_label = debug_label
                    break
            else:
                entries.append(RegionEntryPoint(
                    region=region,
                    node=node,
                    priority=priority,
                    debug_label=debug_label or node.debug_label,
                ))
            # Stable sort keeps registration order among equal priorities
            entries.sort(key=lambda e: -e.priority)

    def remove_node(self, node: 'FocusableNode') -> bool:
        """
        Remove a node from its region and entry point list.

        Returns:
            True if the node was a member of some region
        """
        region = self._node_region.pop(node, None)
        if region is None:
            return False

        members = self._members.get(region)
        if members is not None:
            members.pop(node, None)

        entries = self._entry_points.get(region)
        if entries:
            self._entry_points[region] = [e for e in entries if e.node is not node]

        if node.region == region:
            node.assign_region(None)
        return True

    def region_of(self, node: 'FocusableNode') -> Optional[str]:
        """Get the region a node is registered in."""
        return self._node_region.get(node)

    def regions(self) -> List[str]:
        """All region names, in order of first registration."""
        return list(self._members)

    def members_of(self, region: str) -> List['FocusableNode']:
        """Live members of a region, in registration order."""
        members = self._members.get(region)
        if not members:
            return []
        return [node for node in members if self._is_live(node)]

    def entry_points_of(self, region: str) -> List[RegionEntryPoint]:
        """Entry points of a region, highest priority first (including stale ones)."""
        return list(self._entry_points.get(region, ()))

    def entry_point_for(self, region: str) -> Optional['FocusableNode']:
        """
        Node that should receive focus when entering a region.

        Returns the highest priority live entry point, else the first
        live member in registration order, else None.
        """
        for entry in self._entry_points.get(region, ()):
            if self._is_live(entry.node):
                return entry.node

        members = self.members_of(region)
        return members[0] if members else None

    def cleanup(self) -> int:
        """
        Drop non-live nodes from every region.

        Returns:
            Number of member nodes removed
        """
        removed = 0
        for region, members in self._members.items():
            dead = [node for node in members if not self._is_live(node)]
            for node in dead:
                del members[node]
                if self._node_region.get(node) == region:
                    del self._node_region[node]
                    node.assign_region(None)
            removed += len(dead)

        for region, entries in self._entry_points.items():
            self._entry_points[region] = [e for e in entries if self._is_live(e.node)]

        if removed:
            logger.debug(f"Region cleanup removed {removed} stale nodes")
        return removed

    def clear(self) -> None:
        """Remove all registrations."""
        for node in self._node_region:
            node.assign_region(None)
        self._members.clear()
        self._entry_points.clear()
        self._node_region.clear()

    def __contains__(self, region: str) -> bool:
        return region in self._members
