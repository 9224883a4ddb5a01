"""
Cross-region navigation rules.

A rule says what happens when focus tries to leave ``from_region`` in
``direction`` and the region has nothing left in that direction:

    NavigationRule(
        from_region="tabs",
        to_region="content",
        direction=Direction.DOWN,
        strategy=NavigationStrategy.FIXED_ENTRY,
        bidirectional=True,
        reverse_strategy=NavigationStrategy.MEMORY,
    )

Rules are pydantic models so they can be loaded from plain data, e.g.
``NavigationRule.model_validate({"from_region": "tabs", ...})``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from dpadnav.core.direction import Direction

# resolver(from_node, to_region, direction, candidates) -> node or None
Resolver = Callable[..., Any]


class NavigationStrategy(Enum):
    """How a cross-region move picks its target."""
    GEOMETRIC = "geometric"        # plain nearest-neighbour over the whole scene
    FIXED_ENTRY = "fixed_entry"    # entry point of the target region
    MEMORY = "memory"              # last focused node in the target region
    CUSTOM = "custom"              # rule.resolver decides


class NavigationRule(BaseModel):
    """
    Transition from one region to another in one direction.

    Immutable once built. With ``bidirectional=True`` the rule also
    implies its mirror, see ``reverse_rule()``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        arbitrary_types_allowed=True,
    )

    from_region: str
    to_region: str
    direction: Direction
    strategy: NavigationStrategy = NavigationStrategy.FIXED_ENTRY
    resolver: Optional[Resolver] = None
    bidirectional: bool = False
    reverse_strategy: Optional[NavigationStrategy] = None

    @model_validator(mode='after')
    def check_resolver(self) -> 'NavigationRule':
        if self.resolver is None:
            if self.strategy == NavigationStrategy.CUSTOM:
                raise ValueError("custom strategy requires a resolver")
            if self.bidirectional and self.reverse_strategy == NavigationStrategy.CUSTOM:
                raise ValueError("custom reverse_strategy requires a resolver")
        return self

    def reverse_rule(self) -> Optional['NavigationRule']:
        """
        Build the mirror rule implied by ``bidirectional``.

        Returns:
            to_region -> from_region in the opposite direction, using
            ``reverse_strategy`` (MEMORY if unset); None if the rule is
            one-way
        """
        if not self.bidirectional:
            return None

        return NavigationRule(
            from_region=self.to_region,
            to_region=self.from_region,
            direction=self.direction.opposite,
            strategy=self.reverse_strategy or NavigationStrategy.MEMORY,
            resolver=self.resolver,
            bidirectional=False,
        )

    def matches(self, from_region: str, direction: Direction) -> bool:
        """Check if this rule applies to a move."""
        return self.from_region == from_region and self.direction == direction

    def __str__(self) -> str:
        return f"NavigationRule({self.from_region} -> {self.to_region}, {self.direction}, {self.strategy.value})"


class RuleTable:
    """
    Ordered rule lookup.

    Explicit rules are searched first in declaration order, then the
    mirrors of bidirectional rules in the same order. The first match
    wins.
    """

    def __init__(self, rules: Iterable[NavigationRule] = (), enabled: bool = True):
        self.enabled = enabled
        self._rules: List[NavigationRule] = list(rules)
        self._mirrors: List[Optional[NavigationRule]] = [
            rule.reverse_rule() for rule in self._rules
        ]

    @property
    def rules(self) -> List[NavigationRule]:
        """Explicit rules in declaration order."""
        return list(self._rules)

    def find_rule(self, from_region: Optional[str], direction: Direction) -> Optional[NavigationRule]:
        """
        Find the rule for leaving a region in a direction.

        Returns:
            The first matching rule, or None if none applies
        """
        if not self.enabled or from_region is None:
            return None

        for rule in self._rules:
            if rule.matches(from_region, direction):
                return rule

        for mirror in self._mirrors:
            if mirror is not None and mirror.matches(from_region, direction):
                return mirror

        return None

    def expanded_rules(self) -> List[NavigationRule]:
        """Every explicit rule, each followed by its mirror if it has one."""
        result: List[NavigationRule] = []
        for rule, mirror in zip(self._rules, self._mirrors):
            result.append(rule)
            if mirror is not None:
                result.append(mirror)
        return result

    def __len__(self) -> int:
        return len(self._rules)
