"""
Focusable node registry.

Tracks the live focusable nodes of one navigation root and their
optional region tags. Unregistration cascades into the region table
and flips the node's liveness flag; history entries that still point
at the node simply become stale.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from dpadnav.focus.regions import RegionTable

if TYPE_CHECKING:
    from dpadnav.focus.node import FocusableNode

logger = logging.getLogger(__name__)


class NodeRegistry:
    """
    Registry of focusable nodes for one navigation root.

    Owns the RegionTable so that node and region bookkeeping can never
    drift apart. A node belongs to one registry at a time.
    """

    def __init__(self):
        self._nodes: Dict['FocusableNode', None] = {}
        self.regions = RegionTable(is_live=self.is_live)

    def register(
        self,
        node: 'FocusableNode',
        region: Optional[str] = None,
        is_entry_point: bool = False,
        priority: int = 0,
        debug_label: Optional[str] = None,
    ) -> bool:
        """
        Register a node, optionally tagging it with a region.

        Registering an already known node updates its region. Passing
        ``region=None`` removes it from any region it was in.

        Returns:
            True if the node is registered afterwards
        """
        if not node.alive:
            logger.warning(f"Refusing to register detached node {node!r}")
            return False
        if not node.attach(self):
            logger.warning(f"Refusing to register {node!r}: owned by another registry")
            return False

        if debug_label is not None and node.debug_label is None:
            node.debug_label = debug_label

        self._nodes[node] = None

        if region is not None:
            self.regions.register_node(
                region,
                node,
                is_entry_point=is_entry_point,
                priority=priority,
                debug_label=debug_label,
            )
        else:
            if is_entry_point:
                logger.warning(f"Entry point flag ignored for {node!r}: no region given")
            self.regions.remove_node(node)

        return True

    def unregister(self, node: 'FocusableNode') -> bool:
        """
        Unregister a node and mark it dead.

        Safe to call more than once.

        Returns:
            True if the node was registered
        """
        if node not in self._nodes:
            return False

        del self._nodes[node]
        self.regions.remove_node(node)
        node.detach()
        return True

    def is_live(self, node: 'FocusableNode') -> bool:
        """Whether navigation may target this node."""
        return node.can_receive_focus

    def region_of(self, node: 'FocusableNode') -> Optional[str]:
        """Get the region a node is tagged with."""
        return self.regions.region_of(node)

    def all_live_in(self, region: str) -> List['FocusableNode']:
        """Live members of a region, in registration order."""
        return self.regions.members_of(region)

    def all_live(self) -> List['FocusableNode']:
        """Every live node that takes part in scene-wide traversal."""
        return [
            node for node in self._nodes
            if self.is_live(node) and not node.skip_traversal
        ]

    def cleanup(self) -> int:
        """
        Drop dead nodes from the registry and non-live nodes from regions.

        Returns:
            Number of entries removed
        """
        dead = [node for node in self._nodes if not node.alive]
        for node in dead:
            del self._nodes[node]
            self.regions.remove_node(node)
        return len(dead) + self.regions.cleanup()

    def clear(self) -> None:
        """Forget every node without detaching them."""
        self.regions.clear()
        for node in self._nodes:
            node.release(self)
        self._nodes.clear()

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator['FocusableNode']:
        return iter(list(self._nodes))
