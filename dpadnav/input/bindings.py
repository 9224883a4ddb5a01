"""
Key and gamepad routing for a DpadNavigator.

Translates raw pygame input into navigation commands so a host loop can
hand every event to one router:

    router = KeyRouter(navigator)

    for event in pygame.event.get():
        if router.handle_event(event):
            continue
        ...

Remote controls usually show up as keyboards (arrows, enter, escape,
menu) and game controllers as joysticks (hat = D-pad).
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

import pygame

from dpadnav.core.direction import Direction

if TYPE_CHECKING:
    from dpadnav.navigator import DpadNavigator

logger = logging.getLogger(__name__)


class NavCommand(Enum):
    """Semantic navigation commands."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    NEXT = auto()       # Tab forward
    PREVIOUS = auto()   # Tab backward
    SELECT = auto()
    BACK = auto()
    MENU = auto()


_DIRECTIONS = {
    NavCommand.UP: Direction.UP,
    NavCommand.DOWN: Direction.DOWN,
    NavCommand.LEFT: Direction.LEFT,
    NavCommand.RIGHT: Direction.RIGHT,
}

DEFAULT_KEY_BINDINGS: Dict[NavCommand, List[int]] = {
    NavCommand.UP: [pygame.K_UP],
    NavCommand.DOWN: [pygame.K_DOWN],
    NavCommand.LEFT: [pygame.K_LEFT],
    NavCommand.RIGHT: [pygame.K_RIGHT],
    NavCommand.NEXT: [pygame.K_TAB, pygame.K_PAGEDOWN],
    NavCommand.PREVIOUS: [pygame.K_PAGEUP],
    NavCommand.SELECT: [pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE],
    NavCommand.BACK: [pygame.K_ESCAPE, pygame.K_BACKSPACE, pygame.K_AC_BACK],
    NavCommand.MENU: [pygame.K_MENU],
}

# Gamepad button bindings (SDL controller layout)
DEFAULT_GAMEPAD_BINDINGS: Dict[NavCommand, List[int]] = {
    NavCommand.SELECT: [0],     # A button
    NavCommand.BACK: [1],       # B button
    NavCommand.PREVIOUS: [4],   # Left bumper
    NavCommand.NEXT: [5],       # Right bumper
    NavCommand.MENU: [7],       # Start
}

# D-pad bindings (hat)
DEFAULT_GAMEPAD_HAT_BINDINGS: Dict[tuple[int, int], NavCommand] = {
    (0, 1): NavCommand.UP,
    (0, -1): NavCommand.DOWN,
    (-1, 0): NavCommand.LEFT,
    (1, 0): NavCommand.RIGHT,
}


def _reverse(bindings: Dict[NavCommand, List[int]]) -> Dict[int, List[NavCommand]]:
    """Build reverse lookup: key -> commands."""
    reverse: Dict[int, List[NavCommand]] = {}
    for command, keys in bindings.items():
        for key in keys:
            reverse.setdefault(key, []).append(command)
    return reverse


class KeyRouter:
    """
    Routes pygame input to a navigator.

    Custom shortcuts are checked before the command bindings.
    """

    def __init__(
        self,
        navigator: 'DpadNavigator',
        key_bindings: Optional[Dict[NavCommand, List[int]]] = None,
        custom_shortcuts: Optional[Dict[int, Callable[[], Any]]] = None,
    ):
        self.navigator = navigator

        # Copy so rebinding never touches the module defaults
        source = key_bindings if key_bindings is not None else DEFAULT_KEY_BINDINGS
        self._key_bindings = {command: list(keys) for command, keys in source.items()}
        self._reverse_key_bindings = _reverse(self._key_bindings)

        self._gamepad_bindings = _reverse(DEFAULT_GAMEPAD_BINDINGS)
        self._hat_bindings = DEFAULT_GAMEPAD_HAT_BINDINGS.copy()

        self.custom_shortcuts: Dict[int, Callable[[], Any]] = dict(custom_shortcuts or {})

    def bind(self, command: NavCommand, key: int) -> None:
        """Add a key for a command."""
        keys = self._key_bindings.setdefault(command, [])
        if key not in keys:
            keys.append(key)
        self._reverse_key_bindings = _reverse(self._key_bindings)

    def unbind(self, command: NavCommand, key: int) -> None:
        """Remove a key from a command."""
        keys = self._key_bindings.get(command, [])
        if key in keys:
            keys.remove(key)
        self._reverse_key_bindings = _reverse(self._key_bindings)

    def command_for_key(self, key: int, shift: bool = False) -> Optional[NavCommand]:
        """Command bound to a key, if any (shift turns NEXT into PREVIOUS)."""
        commands = self._reverse_key_bindings.get(key)
        if not commands:
            return None
        command = commands[0]
        if shift and command == NavCommand.NEXT:
            return NavCommand.PREVIOUS
        return command

    def handle_key(self, key: int, shift: bool = False) -> bool:
        """
        Handle a key press.

        Returns:
            True if the key was consumed
        """
        shortcut = self.custom_shortcuts.get(key)
        if shortcut is not None:
            shortcut()
            return True

        command = self.command_for_key(key, shift)
        if command is None:
            return False
        return self.dispatch(command)

    def handle_event(self, event: Any) -> bool:
        """
        Handle a pygame event.

        Returns:
            True if the event was consumed
        """
        if event.type == pygame.KEYDOWN:
            shift = bool(getattr(event, 'mod', 0) & pygame.KMOD_SHIFT)
            return self.handle_key(event.key, shift)

        if event.type == pygame.JOYBUTTONDOWN:
            commands = self._gamepad_bindings.get(event.button)
            return self.dispatch(commands[0]) if commands else False

        if event.type == pygame.JOYHATMOTION:
            command = self._hat_bindings.get(tuple(event.value))
            return self.dispatch(command) if command else False

        return False

    def dispatch(self, command: NavCommand) -> bool:
        """
        Run a command against the navigator.

        Returns:
            True if the command did something (BACK and MENU always count)
        """
        logger.debug(f"Dispatching {command.name}")

        direction = _DIRECTIONS.get(command)
        if direction is not None:
            return self.navigator.navigate(direction)

        if command == NavCommand.NEXT:
            return self.navigator.navigate_next()
        if command == NavCommand.PREVIOUS:
            return self.navigator.navigate_previous()
        if command == NavCommand.SELECT:
            return self.navigator.select_current()
        if command == NavCommand.BACK:
            self.navigator.navigate_back()
            return True
        if command == NavCommand.MENU:
            self.navigator.press_menu()
            return True
        return False
