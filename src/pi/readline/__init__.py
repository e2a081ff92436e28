"""pi-readline: interactive line editing with history for raw terminals."""

# Actions
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
    Signal,
    Yank,
    apply,
)

# Configuration
from pi.readline.config import ReadlineConfig

# History
from pi.readline.history import History

# Input decoding
from pi.readline.input_decoder import InputDecoder, is_escape_sequence

# Keymap
from pi.readline.keymap import DEFAULT_BINDINGS, KeyMap, normalize_trigger

# Line buffer
from pi.readline.line_buffer import LineBuffer

# Rendering
from pi.readline.render import Renderer

# Session
from pi.readline.session import EditSession, get_session, readline

# Terminal collaborators
from pi.readline.terminal import (
    ByteSink,
    ByteSource,
    FdSink,
    FdSource,
    RawMode,
    TermiosControl,
    TerminalControl,
)

# Utilities
from pi.readline.utils import visible_width

__all__ = [
    # Actions
    "Action",
    "Commit",
    "Custom",
    "DeleteBackward",
    "DeleteWordBackward",
    "HistoryNext",
    "HistoryPrev",
    "InsertLiteral",
    "MoveCursor",
    "MoveToEnd",
    "MoveToStart",
    "Signal",
    "Yank",
    "apply",
    # Configuration
    "ReadlineConfig",
    # History
    "History",
    # Input decoding
    "InputDecoder",
    "is_escape_sequence",
    # Keymap
    "DEFAULT_BINDINGS",
    "KeyMap",
    "normalize_trigger",
    # Line buffer
    "LineBuffer",
    # Rendering
    "Renderer",
    # Session
    "EditSession",
    "get_session",
    "readline",
    # Terminal
    "ByteSink",
    "ByteSource",
    "FdSink",
    "FdSource",
    "RawMode",
    "TermiosControl",
    "TerminalControl",
    # Utilities
    "visible_width",
]
