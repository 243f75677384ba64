"""The whiteboard client application: window loop, page switching and rendering."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Protocol

import pygame

from whiteboard.connection_manager import DrawingEventListener, ServerConnectionManager
from whiteboard.drawing_manager import DrawingManager
from whiteboard.drawing_types import Drawable
from whiteboard.event_handlers import (
    CloseEvent,
    Event,
    HomePageEventHandler,
    MouseButton,
    MouseMoved,
    MousePressed,
    MouseReleased,
    WhiteboardPageEventHandler,
)
from whiteboard.renderer import UIRenderer
from whiteboard.state import AppState, DrawTool, EventResult

DEFAULT_ADDRESS = "localhost:50052"
WINDOW_SIZE = (1024, 768)
WINDOW_TITLE = "Whiteboard"
FONT_FILE = "KodeMono-VariableFont_wght.ttf"
FONT_CANDIDATES = (
    Path("../../assets/fonts") / FONT_FILE,
    Path("../../../assets/fonts") / FONT_FILE,
    Path("assets/fonts") / FONT_FILE,
)

_MOUSE_BUTTONS = {1: MouseButton.LEFT, 2: MouseButton.MIDDLE, 3: MouseButton.RIGHT}


class _Connection(Protocol):
    @property
    def connection_id(self) -> int: ...

    def connect(self) -> bool: ...

    def disconnect(self) -> bool: ...

    def open_subscriber_stream(self, listener: DrawingEventListener | None) -> bool: ...

    def send_drawable(self, drawable: Drawable) -> bool: ...

    def send_erase(self, drawable: Drawable) -> bool: ...


def _find_font() -> str | None:
    for candidate in FONT_CANDIDATES:
        if candidate.is_file():
            return str(candidate)
    print("Error loading font", file=sys.stderr, flush=True)
    return None


def translate_event(event: Any) -> Event | None:
    """Turn a pygame event into a handler event, or None when it is not handled."""
    if event.type == pygame.QUIT:
        return CloseEvent()
    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
        button = _MOUSE_BUTTONS.get(event.button)
        if button is None:
            return None
        x, y = event.pos
        if event.type == pygame.MOUSEBUTTONDOWN:
            return MousePressed(button, x, y)
        return MouseReleased(button, x, y)
    if event.type == pygame.MOUSEMOTION:
        x, y = event.pos
        return MouseMoved(x, y)
    return None


class WhiteboardClientApp:
    """Switches between the home page and the whiteboard and draws each frame."""

    def __init__(
        self,
        server_connection_manager: _Connection,
        surface: pygame.Surface,
        font_path: str | None = None,
    ) -> None:
        self._surface = surface
        self._connection = server_connection_manager
        self._drawing_manager = DrawingManager(server_connection_manager)
        self._renderer = UIRenderer(surface, font_path if font_path is not None else _find_font())
        self._home_handler = HomePageEventHandler(surface)
        self._whiteboard_handler = WhiteboardPageEventHandler(surface, self._drawing_manager)
        self._state = AppState.HOME
        self._tool = DrawTool.MARKER
        self._open = True

    @property
    def current_state(self) -> AppState:
        return self._state

    @property
    def current_tool(self) -> DrawTool:
        return self._tool

    @property
    def drawing_manager(self) -> DrawingManager:
        return self._drawing_manager

    @property
    def is_open(self) -> bool:
        return self._open

    def close_window(self) -> None:
        self._open = False

    def process_event(self, event: Event) -> EventResult:
        """Dispatch one event to the current page and act on its outcome."""
        if isinstance(event, CloseEvent):
            self.close_window()

        if self._state is AppState.HOME:
            result, self._tool = self._home_handler.handle_event(event, self._tool)
            if result is EventResult.ATTEMPT_CONNECTION:
                if not self._connection.connect():
                    _report("[Client] Failed to establish connection.")
                    return result
                self._state = AppState.WHITEBOARD
                print(
                    f"[Client] Established connection with id {self._connection.connection_id}",
                    flush=True,
                )
                if not self._connection.open_subscriber_stream(self._drawing_manager):
                    _report("[Client] Failed to subscribe to server event stream.")
            elif result is EventResult.ATTEMPT_CLOSE_APPLICATION:
                self.close_window()
            return result

        result, self._tool = self._whiteboard_handler.handle_event(event, self._tool)
        if result is EventResult.ATTEMPT_DISCONNECTION:
            if not self._connection.disconnect():
                _report("[Client] Failed to disconnect from server.")
                return result
            self._state = AppState.HOME
            self._drawing_manager.clear()
        elif result is EventResult.ATTEMPT_CLOSE_APPLICATION:
            self.close_window()
        return result

    def render(self) -> None:
        """Draw one frame of the current page."""
        self._renderer.clear()
        if self._state is AppState.HOME:
            self._renderer.render_home_screen()
        else:
            manager = self._drawing_manager
            self._renderer.render_whiteboard(
                manager.drawables(),
                manager.current_line,
                manager.current_rectangle,
                manager.cursor_circle,
                manager.is_drawing,
                self._tool,
            )
        self._renderer.display()

    def run(self) -> None:
        """Process window events and redraw until the window is closed."""
        clock = pygame.time.Clock()
        while self._open:
            for raw_event in pygame.event.get():
                event = translate_event(raw_event)
                if event is not None:
                    self.process_event(event)
            self.render()
            clock.tick(60)


def _report(message: str) -> None:
    print(message, file=sys.stderr, flush=True)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    address = args[0] if args else DEFAULT_ADDRESS
    connection = ServerConnectionManager(address)
    pygame.init()
    try:
        surface = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        app = WhiteboardClientApp(connection, surface)
        app.run()
    finally:
        connection.disconnect()
        pygame.quit()
    return 0