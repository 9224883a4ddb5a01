"""
Navigator configuration.

Pydantic models validate once at construction, so a bad capacity or a
custom rule without a resolver fails early instead of on a key press.
Configs are immutable; hand a new one to ``DpadNavigator.configure()``
to change settings on a running root.

Usage:
    config = NavigatorConfig(
        max_history=30,
        tracked_regions={"tabs", "content"},
        rules=[
            NavigationRule(
                from_region="tabs",
                to_region="content",
                direction=Direction.DOWN,
                bidirectional=True,
            ),
        ],
    )

    # or from plain data
    config = NavigatorConfig.model_validate({
        "rules": [{"from_region": "tabs", "to_region": "content", "direction": "down"}],
    })
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from dpadnav.focus.history import DEFAULT_MAX_HISTORY
from dpadnav.focus.rules import NavigationRule, NavigationStrategy


class NavigatorConfig(BaseModel):
    """
    Configuration for one DpadNavigator.

    Attributes:
        enabled: Region-aware navigation on/off (off = plain geometry)
        focus_memory: Record focus history (needed by MEMORY and back)
        max_history: History capacity
        tracked_regions: Regions to record; empty means all regions
        rules: Cross-region rules, first match wins
        default_strategy: Strategy for region crossings no rule covers
        default_route: Route recorded when the host sets none
    """

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        arbitrary_types_allowed=True,
    )

    enabled: bool = True
    focus_memory: bool = True
    max_history: int = Field(default=DEFAULT_MAX_HISTORY, ge=0)
    tracked_regions: frozenset[str] = Field(default_factory=frozenset)
    rules: list[NavigationRule] = Field(default_factory=list)
    default_strategy: NavigationStrategy = NavigationStrategy.GEOMETRIC
    default_route: Optional[str] = None

    def should_track_region(self, region: Optional[str]) -> bool:
        """
        Check whether focus in a region is recorded.

        Nodes without a region are only recorded when every region is
        tracked.
        """
        if not region:
            return not self.tracked_regions
        return not self.tracked_regions or region in self.tracked_regions

    @classmethod
    def disabled(cls) -> 'NavigatorConfig':
        """Plain geometric navigation without memory."""
        return cls(enabled=False, focus_memory=False)
