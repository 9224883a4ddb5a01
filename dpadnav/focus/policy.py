"""
Region-aware navigation policy.

Decides, for one directional press, which node should receive focus:

1. Stay inside the current region if it has anything in that direction.
2. Otherwise apply the first rule leaving the region in that direction.
3. Otherwise (or for GEOMETRIC rules) pick the nearest node in the
   whole scene.

Nothing is cached between calls. "No target" is returned as None and
means the edge of the navigable area.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from dpadnav.core.direction import Direction
from dpadnav.focus.node import FocusableNode
from dpadnav.focus.rules import NavigationRule, NavigationStrategy, RuleTable
from dpadnav.focus.scoring import best_node_in_direction

if TYPE_CHECKING:
    from dpadnav.focus.history import FocusHistory
    from dpadnav.focus.registry import NodeRegistry

logger = logging.getLogger(__name__)


class RegionNavigationPolicy:
    """
    Directional decision function over one navigation root.

    Attributes:
        registry: Nodes and regions of the root
        rules: Cross-region rules
        history: Focus history for MEMORY (optional; without it MEMORY
            behaves like FIXED_ENTRY)
        enabled: When False, only whole-scene geometry is used
        default_strategy: Applied to geometric moves that cross into
            another region when no rule matched
    """

    def __init__(
        self,
        registry: 'NodeRegistry',
        rules: Optional[RuleTable] = None,
        history: Optional['FocusHistory'] = None,
        enabled: bool = True,
        default_strategy: NavigationStrategy = NavigationStrategy.GEOMETRIC,
    ):
        self.registry = registry
        self.rules = rules or RuleTable()
        self.history = history
        self.enabled = enabled
        self.default_strategy = default_strategy

    def decide(self, current: 'FocusableNode', direction: Direction) -> Optional['FocusableNode']:
        """
        Pick the node focus should move to.

        Args:
            current: Node holding focus
            direction: Direction pressed

        Returns:
            Target node, or None to leave focus where it is
        """
        region = self.registry.region_of(current)

        if not self.enabled or region is None:
            return self._validated(self._geometric(current, direction), current)

        # Same-region candidates always outrank rules
        same_region = best_node_in_direction(
            current,
            self.registry.all_live_in(region),
            direction,
        )
        if same_region is not None:
            logger.debug(f"{current!r} -> {same_region!r} within {region!r}")
            return same_region

        rule = self.rules.find_rule(region, direction)
        if rule is not None:
            logger.debug(f"Applying {rule} from {current!r}")
            if rule.strategy == NavigationStrategy.GEOMETRIC:
                return self._validated(self._geometric(current, direction), current)
            return self._validated(self._apply_rule(rule, current, direction), current)

        target = self._geometric(current, direction)
        return self._validated(self._apply_default(current, region, target), current)

    # Strategies

    def _apply_rule(
        self,
        rule: NavigationRule,
        current: 'FocusableNode',
        direction: Direction,
    ) -> Optional['FocusableNode']:
        target_region = rule.to_region

        if rule.strategy == NavigationStrategy.FIXED_ENTRY:
            return self.registry.regions.entry_point_for(target_region)

        if rule.strategy == NavigationStrategy.MEMORY:
            return self.remembered_or_entry(target_region)

        # CUSTOM
        candidates = self.registry.all_live_in(target_region)
        try:
            return rule.resolver(current, target_region, direction, candidates)
        except Exception:
            logger.exception(f"Resolver for {rule} failed")
            return None

    def _apply_default(
        self,
        current: 'FocusableNode',
        region: str,
        target: Optional['FocusableNode'],
    ) -> Optional['FocusableNode']:
        if target is None:
            return None

        target_region = self.registry.region_of(target)
        if target_region is None or target_region == region:
            return target

        if self.default_strategy == NavigationStrategy.FIXED_ENTRY:
            return self.registry.regions.entry_point_for(target_region) or target
        if self.default_strategy == NavigationStrategy.MEMORY:
            return self.remembered_or_entry(target_region) or target
        return target

    def remembered_or_entry(self, region: str) -> Optional['FocusableNode']:
        """Last valid node focused in a region, else its entry point."""
        if self.history is not None:
            self.history.remove_stale()
            entry = self.history.last_focus_in_region(region)
            if entry is not None and entry.is_valid:
                return entry.node
        return self.registry.regions.entry_point_for(region)

    def _geometric(self, current: 'FocusableNode', direction: Direction) -> Optional['FocusableNode']:
        return best_node_in_direction(current, self.registry.all_live(), direction)

    @staticmethod
    def _validated(
        node: Optional['FocusableNode'],
        current: 'FocusableNode',
    ) -> Optional['FocusableNode']:
        if node is None:
            return None
        if node is current:
            # A rule leading back into its own region can land on current
            logger.debug(f"Target of {current!r} is itself, no move")
            return None
        if not isinstance(node, FocusableNode):
            logger.warning(f"Discarding non-node target {node!r}")
            return None
        if not node.can_receive_focus:
            logger.debug(f"Discarding non-live target {node!r}")
            return None
        return node
