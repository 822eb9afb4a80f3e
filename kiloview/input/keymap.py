"""Bindings from decoded key events to viewer actions."""

from __future__ import annotations

from collections.abc import Callable

from .reader import KeyEvent

Action = Callable[[], object]


class KeyMap:
    """Look up the action for a key event and run it.

    Printable bytes and named keys live side by side: ``b"UP"`` and
    ``Key.ARROW_UP`` are separate entries. Action return values are ignored.
    """

    def __init__(self) -> None:
        self._actions: dict[KeyEvent, Action] = {}

    def bind(self, action: Action, *keys: KeyEvent) -> None:
        for key in keys:
            self._actions[key] = action

    def __contains__(self, key: object) -> bool:
        return key in self._actions

    def dispatch(self, key: KeyEvent) -> bool:
        """Run the action bound to ``key``; return ``False`` if there is none."""
        action = self._actions.get(key)
        if action is None:
            return False
        action()
        return True
