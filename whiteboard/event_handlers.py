"""Translate pointer and window events into application and drawing actions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Union

from whiteboard.drawing_types import Position
from whiteboard.state import DrawTool, EventResult

MENU_BAR_HEIGHT = 60
BUTTON_WIDTH = 120
BUTTON_HEIGHT = 40
MENU_BUTTON_X = 10
MENU_BUTTON_Y = 10
MENU_BUTTON_SPACING = BUTTON_WIDTH + 10

Rect = tuple[float, float, float, float]
HandlerOutcome = tuple[EventResult, DrawTool]


class MouseButton(Enum):
    """The mouse buttons the handlers distinguish."""

    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


@dataclass(frozen=True)
class CloseEvent:
    """The user asked to close the window."""


@dataclass(frozen=True)
class MousePressed:
    button: MouseButton
    x: float
    y: float

    @property
    def position(self) -> Position:
        return (float(self.x), float(self.y))


@dataclass(frozen=True)
class MouseReleased:
    button: MouseButton
    x: float
    y: float

    @property
    def position(self) -> Position:
        return (float(self.x), float(self.y))


@dataclass(frozen=True)
class MouseMoved:
    x: float
    y: float

    @property
    def position(self) -> Position:
        return (float(self.x), float(self.y))


Event = Union[CloseEvent, MousePressed, MouseReleased, MouseMoved]


class _Window(Protocol):
    def get_size(self) -> tuple[int, int]: ...


class _DrawingControls(Protocol):
    @property
    def is_drawing(self) -> bool: ...

    def start_drawing(self, position: Position, tool: DrawTool) -> None: ...

    def update_drawing(self, position: Position, tool: DrawTool) -> None: ...

    def end_drawing_and_update(self, tool: DrawTool) -> None: ...

    def stop_drawing(self, tool: DrawTool) -> None: ...


def _contains(rect: Rect, position: Position) -> bool:
    left, top, width, height = rect
    x, y = position
    return (
        min(left, left + width) <= x < max(left, left + width)
        and min(top, top + height) <= y < max(top, top + height)
    )


def home_button_rects(window_size: tuple[int, int]) -> tuple[Rect, Rect]:
    """The connect and exit button areas of the home page."""
    width, height = window_size
    left = width // 2 - BUTTON_WIDTH // 2
    connect = (left, height // 2, BUTTON_WIDTH, BUTTON_HEIGHT)
    exit_ = (left, height / 1.6, BUTTON_WIDTH, BUTTON_HEIGHT)
    return connect, exit_


def menu_button_rects() -> list[Rect]:
    """The home button followed by one button per tool, left to right."""
    return [
        (MENU_BUTTON_X + index * MENU_BUTTON_SPACING, MENU_BUTTON_Y, BUTTON_WIDTH, BUTTON_HEIGHT)
        for index in range(1 + len(DrawTool))
    ]


class HomePageEventHandler:
    """Handles the home page's connect and exit buttons."""

    def __init__(self, window: _Window) -> None:
        self._window = window

    def handle_event(self, event: Event, current_tool: DrawTool) -> HandlerOutcome:
        """Return the requested action and the (unchanged) current tool."""
        if isinstance(event, CloseEvent):
            return EventResult.ATTEMPT_CLOSE_APPLICATION, current_tool
        if isinstance(event, MousePressed) and event.button is MouseButton.LEFT:
            connect, exit_ = home_button_rects(self._window.get_size())
            if _contains(connect, event.position):
                return EventResult.ATTEMPT_CONNECTION, current_tool
            if _contains(exit_, event.position):
                return EventResult.ATTEMPT_CLOSE_APPLICATION, current_tool
        return EventResult.SUCCESS, current_tool


class WhiteboardPageEventHandler:
    """Handles the menu bar and drawing input on the whiteboard page."""

    def __init__(self, window: _Window, drawing_manager: _DrawingControls) -> None:
        self._window = window
        self._drawing_manager = drawing_manager

    def _menu_bar_area(self) -> Rect:
        return (0, 0, self._window.get_size()[0], MENU_BAR_HEIGHT + 2)

    def handle_event(self, event: Event, current_tool: DrawTool) -> HandlerOutcome:
        """Return the requested action and the tool selected afterwards."""
        manager = self._drawing_manager
        if isinstance(event, CloseEvent):
            return EventResult.ATTEMPT_CLOSE_APPLICATION, current_tool

        if isinstance(event, MousePressed):
            if event.button is MouseButton.LEFT:
                if _contains(self._menu_bar_area(), event.position):
                    return self.handle_menu_click(event.position, current_tool)
                if manager.is_drawing:
                    manager.end_drawing_and_update(current_tool)
                else:
                    manager.start_drawing(event.position, current_tool)
            elif event.button is MouseButton.RIGHT and manager.is_drawing:
                manager.stop_drawing(current_tool)

        elif isinstance(event, MouseReleased):
            if (
                event.button is MouseButton.LEFT
                and manager.is_drawing
                and current_tool is DrawTool.ERASER
            ):
                manager.end_drawing_and_update(current_tool)

        elif isinstance(event, MouseMoved):
            if _contains(self._menu_bar_area(), event.position):
                if manager.is_drawing and current_tool is DrawTool.ERASER:
                    manager.end_drawing_and_update(current_tool)
            elif manager.is_drawing:
                manager.update_drawing(event.position, current_tool)

        return EventResult.SUCCESS, current_tool

    def handle_menu_click(self, position: Position, current_tool: DrawTool) -> HandlerOutcome:
        """Act on a click inside the menu bar."""
        home, *tool_buttons = menu_button_rects()
        if _contains(home, position):
            return EventResult.ATTEMPT_DISCONNECTION, current_tool
        for rect, tool in zip(tool_buttons, DrawTool):
            if _contains(rect, position):
                self._drawing_manager.stop_drawing(current_tool)
                return EventResult.SUCCESS, tool
        return EventResult.SUCCESS, current_tool