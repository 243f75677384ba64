"""Client state machine values and event handler outcomes."""

from __future__ import annotations

from enum import Enum, IntEnum


class AppState(Enum):
    """Which page the client is showing."""

    HOME = "home"
    WHITEBOARD = "whiteboard"


class DrawTool(Enum):
    """The drawing tools, in the order they appear on the menu bar."""

    MARKER = "marker"
    RECTANGLE = "rectangle"
    ERASER = "eraser"

    @property
    def label(self) -> str:
        """The text shown on the tool's menu button."""
        return self.name


class EventResult(IntEnum):
    """What an event handler asks the application to do next."""

    SUCCESS = 0
    ATTEMPT_CLOSE_APPLICATION = 1
    ATTEMPT_CONNECTION = 2
    ATTEMPT_DISCONNECTION = 3