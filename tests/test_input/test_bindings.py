from types import SimpleNamespace
from unittest.mock import MagicMock

import pygame
import pytest
from dpadnav.core.direction import Direction
from dpadnav.input.bindings import DEFAULT_KEY_BINDINGS, KeyRouter, NavCommand


@pytest.fixture
def nav():
    """Navigator stand-in recording what the router calls."""
    navigator = MagicMock()
    navigator.navigate.return_value = True
    navigator.navigate_next.return_value = True
    navigator.navigate_previous.return_value = True
    navigator.select_current.return_value = True
    return navigator


@pytest.fixture
def router(nav):
    return KeyRouter(nav)


def _key(key, mod=0):
    return SimpleNamespace(type=pygame.KEYDOWN, key=key, mod=mod)


@pytest.mark.parametrize("key, direction", [
    (pygame.K_UP, Direction.UP),
    (pygame.K_DOWN, Direction.DOWN),
    (pygame.K_LEFT, Direction.LEFT),
    (pygame.K_RIGHT, Direction.RIGHT),
])
def test_arrow_keys_navigate(router, nav, key, direction):
    assert router.handle_event(_key(key))
    nav.navigate.assert_called_once_with(direction)


def test_tab_and_shift_tab(router, nav):
    router.handle_event(_key(pygame.K_TAB))
    nav.navigate_next.assert_called_once()

    router.handle_event(_key(pygame.K_TAB, mod=pygame.KMOD_LSHIFT))
    nav.navigate_previous.assert_called_once()


def test_select_back_menu(router, nav):
    assert router.handle_event(_key(pygame.K_RETURN))
    nav.select_current.assert_called_once()

    assert router.handle_event(_key(pygame.K_ESCAPE))
    nav.navigate_back.assert_called_once()

    assert router.handle_event(_key(pygame.K_MENU))
    nav.press_menu.assert_called_once()


def test_back_counts_as_handled_even_without_history(router, nav):
    nav.navigate_back.return_value = None
    assert router.dispatch(NavCommand.BACK)


def test_blocked_move_is_not_consumed(router, nav):
    nav.navigate.return_value = False
    assert not router.handle_event(_key(pygame.K_DOWN))


def test_unbound_keys_and_events_pass_through(router, nav):
    assert not router.handle_event(_key(pygame.K_a))
    assert not router.handle_event(SimpleNamespace(type=pygame.MOUSEBUTTONDOWN))
    nav.navigate.assert_not_called()


def test_custom_shortcut_runs_first(nav):
    shortcut = MagicMock()
    router = KeyRouter(nav, custom_shortcuts={pygame.K_DOWN: shortcut})

    assert router.handle_key(pygame.K_DOWN)
    shortcut.assert_called_once()
    nav.navigate.assert_not_called()


def test_rebinding_does_not_touch_defaults(router, nav):
    router.bind(NavCommand.DOWN, pygame.K_s)
    router.unbind(NavCommand.DOWN, pygame.K_DOWN)

    assert router.command_for_key(pygame.K_s) == NavCommand.DOWN
    assert router.command_for_key(pygame.K_DOWN) is None
    assert DEFAULT_KEY_BINDINGS[NavCommand.DOWN] == [pygame.K_DOWN]


def test_gamepad_hat_and_buttons(router, nav):
    assert router.handle_event(SimpleNamespace(type=pygame.JOYHATMOTION, value=(0, -1)))
    nav.navigate.assert_called_once_with(Direction.DOWN)

    # Hat released
    assert not router.handle_event(SimpleNamespace(type=pygame.JOYHATMOTION, value=(0, 0)))

    assert router.handle_event(SimpleNamespace(type=pygame.JOYBUTTONDOWN, button=0))
    nav.select_current.assert_called_once()

    assert router.handle_event(SimpleNamespace(type=pygame.JOYBUTTONDOWN, button=1))
    nav.navigate_back.assert_called_once()

    assert not router.handle_event(SimpleNamespace(type=pygame.JOYBUTTONDOWN, button=12))


def test_router_drives_real_navigator(tv_scene):
    navigator, tabs, entry, card = tv_scene
    router = KeyRouter(navigator)
    navigator.focus_host.request_focus(tabs[1])

    router.handle_event(_key(pygame.K_DOWN))
    assert navigator.focused is entry

    router.handle_event(_key(pygame.K_UP))
    assert navigator.focused is tabs[1]
