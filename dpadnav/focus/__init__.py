"""
Focus navigation engine.

Architecture:
    - FocusableNode: handle for something that can hold focus
    - NodeRegistry / RegionTable: live nodes and their regions
    - best_in_direction: directional nearest-neighbour scoring
    - RuleTable: cross-region rules (with bidirectional mirrors)
    - RegionNavigationPolicy: per-press decision
    - FocusHistory: bounded focus stack for memory and back navigation
    - FocusManager: default focus host
"""

from dpadnav.focus.node import FocusableNode
from dpadnav.focus.manager import FocusManager, FocusHost
from dpadnav.focus.regions import RegionTable, RegionEntryPoint
from dpadnav.focus.registry import NodeRegistry
from dpadnav.focus.scoring import (
    best_in_direction,
    best_node_in_direction,
    directional_score,
    is_in_direction,
    reading_order,
)
from dpadnav.focus.rules import NavigationStrategy, NavigationRule, RuleTable
from dpadnav.focus.history import FocusHistory, FocusHistoryEntry, DEFAULT_MAX_HISTORY
from dpadnav.focus.policy import RegionNavigationPolicy

__all__ = [
    # Nodes
    "FocusableNode",
    "FocusManager",
    "FocusHost",

    # Regions
    "NodeRegistry",
    "RegionTable",
    "RegionEntryPoint",

    # Scoring
    "best_in_direction",
    "best_node_in_direction",
    "directional_score",
    "is_in_direction",
    "reading_order",

    # Rules
    "NavigationStrategy",
    "NavigationRule",
    "RuleTable",
    "RegionNavigationPolicy",

    # History
    "FocusHistory",
    "FocusHistoryEntry",
    "DEFAULT_MAX_HISTORY",
]
