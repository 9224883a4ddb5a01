import os
import sys
import pytest

# Ensure dpadnav can be imported without installing
sys.path.append(os.getcwd())

from dpadnav.core.direction import Direction
from dpadnav.core.geometry import Rect
from dpadnav.focus.node import FocusableNode
from dpadnav.focus.rules import NavigationRule, NavigationStrategy


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from dpadnav.core.events import EventBus
    return EventBus()


@pytest.fixture
def make_node():
    """Factory for nodes with fixed geometry."""
    def _make(x=0, y=0, width=10, height=10, label=None, **kwargs):
        return FocusableNode(Rect(x, y, width, height), debug_label=label, **kwargs)
    return _make


@pytest.fixture
def registry():
    """Fresh NodeRegistry for each test."""
    from dpadnav.focus.registry import NodeRegistry
    return NodeRegistry()


@pytest.fixture
def navigator(event_bus):
    """Navigator with default config, publishing on the test bus."""
    from dpadnav.navigator import DpadNavigator
    return DpadNavigator(event_bus=event_bus)


@pytest.fixture
def tabs_rule():
    """tabs -> content on DOWN, remembered on the way back UP."""
    return NavigationRule(
        from_region="tabs",
        to_region="content",
        direction=Direction.DOWN,
        strategy=NavigationStrategy.FIXED_ENTRY,
        bidirectional=True,
        reverse_strategy=NavigationStrategy.MEMORY,
    )


@pytest.fixture
def tv_scene(make_node, tabs_rule):
    """
    Tab bar over a content row.

    tabs:    [0,100] [100,200] [200,300] at y=0
    content: entry [90,110] and a second card [140,160] at y=50,
             the second card sits right under the middle tab
    """
    from dpadnav.config import NavigatorConfig
    from dpadnav.navigator import DpadNavigator

    navigator = DpadNavigator(NavigatorConfig(rules=[tabs_rule]))

    tabs = [
        make_node(0, 0, 100, 40, label="tab-1"),
        make_node(100, 0, 100, 40, label="tab-2"),
        make_node(200, 0, 100, 40, label="tab-3"),
    ]
    for tab in tabs:
        navigator.register_node(tab, region="tabs")

    entry = make_node(90, 50, 20, 40, label="content-entry")
    card = make_node(140, 50, 20, 40, label="content-card")
    navigator.register_node(entry, region="content", is_entry_point=True)
    navigator.register_node(card, region="content")

    return navigator, tabs, entry, card
