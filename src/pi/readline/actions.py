"""Editing actions and the dispatcher that applies them to a session.

Each key binding resolves to one of the action variants below. ``apply``
mutates the session's buffer/history, stages the render output in
``session.pending_output`` and returns a :class:`Signal` telling the read
loop what to do next.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    from pi.readline.session import EditSession


class Signal(enum.Enum):
    """Control flow returned by every action."""

    CONTINUE = "continue"
    CONTINUE_SILENT = "continue-silent"
    DONE = "done"


# ---------------------------------------------------------------------------
# Action variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InsertLiteral:
    """Insert *text* as if it had been typed."""

    text: str


@dataclass(frozen=True)
class MoveCursor:
    delta: int


@dataclass(frozen=True)
class MoveToStart:
    pass


@dataclass(frozen=True)
class MoveToEnd:
    pass


@dataclass(frozen=True)
class HistoryPrev:
    pass


@dataclass(frozen=True)
class HistoryNext:
    pass


@dataclass(frozen=True)
class DeleteBackward:
    pass


@dataclass(frozen=True)
class DeleteWordBackward:
    pass


@dataclass(frozen=True)
class Yank:
    pass


@dataclass(frozen=True)
class Commit:
    pass


@dataclass(frozen=True)
class Custom:
    """User handler; receives the session and returns a :class:`Signal`.

    A handler returning ``None`` is treated as ``Signal.CONTINUE``.
    """

    handler: Callable[["EditSession"], Signal | None]


Action = Union[
    InsertLiteral,
    MoveCursor,
    MoveToStart,
    MoveToEnd,
    HistoryPrev,
    HistoryNext,
    DeleteBackward,
    DeleteWordBackward,
    Yank,
    Commit,
    Custom,
]


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


def apply(action: Action, session: EditSession) -> Signal:
    """Apply *action* to *session* and return the resulting signal."""
    buffer = session.buffer
    renderer = session.renderer
    was_kill = session.last_action == "kill"
    session.last_action = None

    if isinstance(action, InsertLiteral):
        _insert(session, action.text)
        return Signal.CONTINUE

    if isinstance(action, MoveCursor):
        old_cursor = buffer.cursor
        moved = buffer.move_cursor(action.delta)
        session.pending_output = renderer.move(old_cursor) if moved else ""
        return Signal.CONTINUE

    if isinstance(action, (MoveToStart, MoveToEnd)):
        old_cursor = buffer.cursor
        moved = buffer.move_to_start() if isinstance(action, MoveToStart) else buffer.move_to_end()
        session.pending_output = renderer.move(old_cursor) if moved else ""
        return Signal.CONTINUE

    if isinstance(action, HistoryPrev):
        old_text = buffer.text
        buffer.set_whole(session.history.previous())
        session.pending_output = renderer.replace_line(old_text)
        return Signal.CONTINUE

    if isinstance(action, HistoryNext):
        old_text = buffer.text
        buffer.set_whole(session.history.next(old_text))
        session.pending_output = renderer.replace_line(old_text)
        return Signal.CONTINUE

    if isinstance(action, DeleteBackward):
        at_end = buffer.at_end
        removed = buffer.delete_before_cursor()
        session.pending_output = renderer.backspace(removed, at_end)
        return Signal.CONTINUE

    if isinstance(action, DeleteWordBackward):
        at_end = buffer.at_end
        removed = buffer.delete_word_before_cursor()
        if removed:
            session.killed = removed + session.killed if was_kill else removed
            session.last_action = "kill"
        session.pending_output = renderer.backspace(removed, at_end)
        return Signal.CONTINUE

    if isinstance(action, Yank):
        if session.killed:
            _insert(session, session.killed)
        else:
            session.pending_output = ""
        return Signal.CONTINUE

    if isinstance(action, Commit):
        session.history.record(buffer.text)
        session.pending_output = renderer.commit()
        return Signal.DONE

    if isinstance(action, Custom):
        result = action.handler(session)
        return Signal.CONTINUE if result is None else result

    raise TypeError(f"unknown action: {action!r}")


def _insert(session: EditSession, text: str) -> None:
    buffer = session.buffer
    old_cursor = buffer.cursor
    buffer.insert_at_cursor(text)
    session.pending_output = session.renderer.insert(old_cursor)
