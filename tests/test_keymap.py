"""Tests for pi.readline.keymap."""

from __future__ import annotations

import pytest

from pi.readline.actions import (
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
    Signal,
    Yank,
)
from pi.readline.keymap import KeyMap, normalize_trigger, to_action


class TestNormalizeTrigger:
    """Expansion of the escape and control shorthands."""

    def test_escape_shorthand_expands_to_csi(self) -> None:
        assert normalize_trigger("\\e[A") == "\x1b[A"
        assert normalize_trigger("\\e[1;5C") == "\x1b[1;5C"

    def test_control_shorthand_maps_letter_to_control_code(self) -> None:
        assert normalize_trigger("\\C-a") == "\x01"
        assert normalize_trigger("\\C-W") == "\x17"

    def test_literal_triggers_are_unchanged(self) -> None:
        assert normalize_trigger("\x7f") == "\x7f"
        assert normalize_trigger("jj") == "jj"

    def test_empty_trigger_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            normalize_trigger("")

    def test_invalid_control_shorthand_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            normalize_trigger("\\C-ab")
        with pytest.raises(ValueError):
            normalize_trigger("\\C-1")


class TestToAction:
    """Coercing bindings into actions."""

    def test_string_becomes_literal_substitution(self) -> None:
        assert to_action("hello") == InsertLiteral("hello")

    def test_action_is_kept(self) -> None:
        assert to_action(Commit()) == Commit()

    @pytest.mark.parametrize(
        "action",
        [MoveToEnd(), DeleteWordBackward(), Yank(), MoveCursor(-1), Custom(lambda s: None)],
    )
    def test_every_action_variant_is_kept(self, action: object) -> None:
        assert to_action(action) is action  # type: ignore[arg-type]

    def test_callable_becomes_custom(self) -> None:
        def handler(session: object) -> Signal:
            return Signal.CONTINUE

        action = to_action(handler)
        assert isinstance(action, Custom)
        assert action.handler is handler

    def test_other_values_are_rejected(self) -> None:
        with pytest.raises(TypeError):
            to_action(42)  # type: ignore[arg-type]


class TestDefaultBindings:
    """The bindings every key map starts with."""

    def test_arrow_keys(self) -> None:
        km = KeyMap()
        assert km.lookup("\x1b[A") == HistoryPrev()
        assert km.lookup("\x1b[B") == HistoryNext()
        assert km.lookup("\x1b[C") == MoveCursor(1)
        assert km.lookup("\x1b[D") == MoveCursor(-1)

    def test_both_backspace_codes(self) -> None:
        km = KeyMap()
        assert km.lookup("\x08") == DeleteBackward()
        assert km.lookup("\x7f") == DeleteBackward()

    def test_newline_commits(self) -> None:
        km = KeyMap()
        assert km.lookup("\n") == Commit()
        assert km.lookup("\r") == Commit()

    def test_control_motion(self) -> None:
        km = KeyMap()
        assert km.lookup("\x01") == MoveToStart()
        assert km.lookup("\x02") == MoveCursor(-1)
        assert km.lookup("\x06") == MoveCursor(1)

    def test_unbound_returns_none(self) -> None:
        assert KeyMap().lookup("a") is None

    def test_without_defaults(self) -> None:
        km = KeyMap(defaults=False)
        assert len(km) == 0
        assert km.lookup("\n") is None


class TestKeyMapBinding:
    """Binding, unbinding and lookup."""

    def test_bind_overrides_default(self) -> None:
        km = KeyMap()
        km.bind("\\e[A", MoveToStart())
        assert km.lookup("\x1b[A") == MoveToStart()

    def test_bind_from_constructor(self) -> None:
        km = KeyMap({"\\C-t": "tab"})
        assert km.lookup("\x14") == InsertLiteral("tab")

    def test_unbind(self) -> None:
        km = KeyMap()
        km.unbind("\\e[A")
        assert "\x1b[A" not in km
        km.unbind("\\e[A")

    def test_triggers_are_normalized(self) -> None:
        km = KeyMap(defaults=False)
        km.bind("\\e[H", MoveToStart())
        assert list(km) == ["\x1b[H"]
