"""Trigger to action table for the line editor."""

from __future__ import annotations

from typing import Callable, Iterator, Union, get_args

from pi.readline.actions import (
    Action,
    Commit,
    Custom,
    DeleteBackward,
    DeleteWordBackward,
    HistoryNext,
    HistoryPrev,
    InsertLiteral,
    MoveCursor,
    MoveToEnd,
    MoveToStart,
    Yank,
)
from pi.readline.input_decoder import ESC

# Shorthand prefixes accepted by ``bind``: "\e[A" and "\C-a" written with
# a literal backslash.
_ESCAPE_SHORTHAND = "\\e["
_CONTROL_SHORTHAND = "\\C-"

Binding = Union[Action, str, Callable]

DEFAULT_BINDINGS: dict[str, Action] = {
    # Arrow keys
    "\\e[A": HistoryPrev(),
    "\\e[B": HistoryNext(),
    "\\e[C": MoveCursor(1),
    "\\e[D": MoveCursor(-1),
    # Deletion
    "\x08": DeleteBackward(),
    "\x7f": DeleteBackward(),
    "\\C-w": DeleteWordBackward(),
    # Commit
    "\n": Commit(),
    "\r": Commit(),
    # Emacs-style motion
    "\\C-a": MoveToStart(),
    "\\C-e": MoveToEnd(),
    "\\C-b": MoveCursor(-1),
    "\\C-f": MoveCursor(1),
    # Yank
    "\\C-y": Yank(),
}


def normalize_trigger(trigger: str) -> str:
    """Expand the ``\\e[`` and ``\\C-`` shorthands into literal sequences."""
    if not trigger:
        raise ValueError("trigger must not be empty")

    if trigger.startswith(_ESCAPE_SHORTHAND):
        return ESC + "[" + trigger[len(_ESCAPE_SHORTHAND) :]

    if trigger.startswith(_CONTROL_SHORTHAND):
        letter = trigger[len(_CONTROL_SHORTHAND) :].lower()
        code = ord(letter) - 96 if len(letter) == 1 else -1
        if not 0 < code < 32:
            raise ValueError(f"invalid control shorthand: {trigger!r}")
        return chr(code)

    return trigger


def to_action(binding: Binding) -> Action:
    """Coerce a string substitution or a plain callable into an action."""
    if isinstance(binding, str):
        return InsertLiteral(binding)
    if isinstance(binding, get_args(Action)):
        return binding
    if callable(binding):
        return Custom(binding)
    raise TypeError(f"cannot bind {binding!r}")


class KeyMap:
    """Exact-match table from trigger sequences to actions."""

    def __init__(self, bindings: dict[str, Binding] | None = None, *, defaults: bool = True) -> None:
        self._bindings: dict[str, Action] = {}
        if defaults:
            for trigger, action in DEFAULT_BINDINGS.items():
                self.bind(trigger, action)
        for trigger, action in (bindings or {}).items():
            self.bind(trigger, action)

    def bind(self, trigger: str, action: Binding) -> None:
        self._bindings[normalize_trigger(trigger)] = to_action(action)

    def unbind(self, trigger: str) -> None:
        self._bindings.pop(normalize_trigger(trigger), None)

    def lookup(self, data: str) -> Action | None:
        return self._bindings.get(data)

    def __contains__(self, trigger: object) -> bool:
        return trigger in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)
