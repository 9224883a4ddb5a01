"""Input routing for D-pad navigation."""

from dpadnav.input.bindings import (
    NavCommand,
    KeyRouter,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_GAMEPAD_BINDINGS,
    DEFAULT_GAMEPAD_HAT_BINDINGS,
)

__all__ = [
    "NavCommand",
    "KeyRouter",
    "DEFAULT_KEY_BINDINGS",
    "DEFAULT_GAMEPAD_BINDINGS",
    "DEFAULT_GAMEPAD_HAT_BINDINGS",
]
