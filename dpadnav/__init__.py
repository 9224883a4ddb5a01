"""
dpadnav

Directional focus navigation for D-pad and remote-control driven UIs
(TV, kiosk, console menus).

Quick Start:
    from dpadnav import (
        DpadNavigator, NavigatorConfig, NavigationRule, NavigationStrategy,
        FocusableNode, Rect, Direction,
    )

    config = NavigatorConfig(rules=[
        NavigationRule(
            from_region="tabs",
            to_region="content",
            direction=Direction.DOWN,
            strategy=NavigationStrategy.FIXED_ENTRY,
            bidirectional=True,
            reverse_strategy=NavigationStrategy.MEMORY,
        ),
    ])
    navigator = DpadNavigator(config)

    tab = FocusableNode(Rect(0, 0, 100, 40), debug_label="Home")
    card = FocusableNode(Rect(0, 60, 200, 120), debug_label="Card 1")
    navigator.register_node(tab, region="tabs")
    navigator.register_node(card, region="content", is_entry_point=True)

    navigator.focus_host.request_focus(tab)
    navigator.navigate(Direction.DOWN)   # -> card
    navigator.navigate(Direction.UP)     # -> tab (remembered)
    navigator.navigate_back()            # -> card

Architecture:
    - DpadNavigator: one navigation root (registry, rules, history)
    - RegionNavigationPolicy: the per-press decision
    - FocusHistory: memory and back navigation
    - KeyRouter: pygame key/gamepad input -> navigator
"""

__version__ = "0.1.0"

from dpadnav.core import Direction, Rect, EventBus, Event, NavigationEvent
from dpadnav.focus import (
    FocusableNode,
    FocusManager,
    FocusHost,
    NodeRegistry,
    RegionTable,
    RegionEntryPoint,
    best_in_direction,
    NavigationStrategy,
    NavigationRule,
    RuleTable,
    RegionNavigationPolicy,
    FocusHistory,
    FocusHistoryEntry,
)
from dpadnav.config import NavigatorConfig
from dpadnav.navigator import DpadNavigator

__all__ = [
    # Core
    "Direction",
    "Rect",
    "EventBus",
    "Event",
    "NavigationEvent",

    # Focus
    "FocusableNode",
    "FocusManager",
    "FocusHost",
    "NodeRegistry",
    "RegionTable",
    "RegionEntryPoint",
    "best_in_direction",
    "NavigationStrategy",
    "NavigationRule",
    "RuleTable",
    "RegionNavigationPolicy",
    "FocusHistory",
    "FocusHistoryEntry",

    # Root
    "NavigatorConfig",
    "DpadNavigator",
]
