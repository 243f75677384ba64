"""Client-side drawing state: the board's objects and the stroke in progress."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Protocol

from whiteboard.conversion import to_point, to_rect_shape
from whiteboard.drawing_types import Color, Drawable, Line, Position, Rectangle
from whiteboard.geometry import circle_intersects_line, circle_intersects_rectangle
from whiteboard.state import DrawTool

ERASER_SIZE = 20


class _DrawableSender(Protocol):
    def send_drawable(self, drawable: Drawable) -> bool: ...

    def send_erase(self, drawable: Drawable) -> bool: ...


@dataclass
class CursorCircle:
    """The eraser cursor: an outlined circle placed by its top-left corner."""

    radius: float = ERASER_SIZE
    x: float = 0.0
    y: float = 0.0
    outline_color: Color = field(default_factory=lambda: Color.BLACK)
    outline_thickness: float = 1.0

    @property
    def center(self) -> Position:
        return (self.x + self.radius, self.y + self.radius)

    @center.setter
    def center(self, position: Position) -> None:
        self.x = position[0] - self.radius
        self.y = position[1] - self.radius


class DrawingManager:
    """Tracks the board's objects and turns pointer input into drawing events."""

    def __init__(self, server_connection_manager: _DrawableSender) -> None:
        self._connection = server_connection_manager
        self._drawables: dict[str, Drawable] = {}
        self._lock = threading.Lock()
        self._current_line = Line()
        self._current_rectangle = Rectangle()
        self._cursor_circle = CursorCircle()
        self._is_drawing = False
        self._id_counter = 0

    @property
    def current_line(self) -> Line:
        return self._current_line

    @property
    def current_rectangle(self) -> Rectangle:
        return self._current_rectangle

    @property
    def cursor_circle(self) -> CursorCircle:
        return self._cursor_circle

    @property
    def is_drawing(self) -> bool:
        return self._is_drawing

    def on_drawable_added(self, drawable: Drawable) -> None:
        """Store an object announced by the server.

        Raises ValueError when its id is not a whole number.
        """
        object_id = drawable.object_id()
        if not object_id:
            return
        with self._lock:
            self._drawables[object_id] = drawable
            self._id_counter = int(object_id) + 1

    def on_drawable_erased(self, drawable: Drawable) -> None:
        object_id = drawable.object_id()
        if not object_id:
            return
        with self._lock:
            self._drawables.pop(object_id, None)

    def on_listener_disconnected(self, code: Any, message: str | None) -> None:
        print(
            f"[Client] Listener disconnected with error code {code}: {message}",
            file=sys.stderr,
            flush=True,
        )

    def start_drawing(self, position: Position, tool: DrawTool) -> None:
        if self._is_drawing:
            return
        self._is_drawing = True
        if tool is DrawTool.MARKER:
            self._current_line.start = to_point(*position, Color.BLACK)
        elif tool is DrawTool.RECTANGLE:
            self._current_rectangle.start = to_point(*position, Color.BLACK)
        elif tool is DrawTool.ERASER:
            self._cursor_circle.center = position
            self.erase_at(position)

    def update_drawing(self, position: Position, tool: DrawTool) -> None:
        if tool is DrawTool.MARKER:
            self._move_end(self._current_line, position)
        elif tool is DrawTool.RECTANGLE:
            self._move_end(self._current_rectangle, position)
        elif tool is DrawTool.ERASER:
            self._cursor_circle.center = position
            self.erase_at(position)

    def end_drawing_and_update(self, tool: DrawTool) -> None:
        """Finish the stroke in progress and send it to the server."""
        if not self._is_drawing:
            return
        self._is_drawing = False
        if tool is DrawTool.MARKER:
            line = self._current_line
            line.id = self._next_id()
            self._send(Drawable(line=line))
            self._current_line = Line()
        elif tool is DrawTool.RECTANGLE:
            rectangle = self._current_rectangle
            rectangle.id = self._next_id()
            self._send(Drawable(rectangle=rectangle))
            self._current_rectangle = Rectangle()
        elif tool is DrawTool.ERASER:
            self._cursor_circle.x = 0.0
            self._cursor_circle.y = 0.0

    def stop_drawing(self, tool: DrawTool) -> None:
        """Abandon the stroke in progress without sending it."""
        if not self._is_drawing:
            return
        self._is_drawing = False
        if tool is DrawTool.MARKER:
            self._current_line = Line()
        elif tool is DrawTool.RECTANGLE:
            self._current_rectangle = Rectangle()
        elif tool is DrawTool.ERASER:
            self._cursor_circle.x = 0.0
            self._cursor_circle.y = 0.0

    def erase_at(self, position: Position) -> None:
        """Ask the server to erase every object the eraser circle touches."""
        with self._lock:
            for drawable in list(self._drawables.values()):
                if drawable.line is not None:
                    hit = circle_intersects_line(drawable.line, position, ERASER_SIZE)
                elif drawable.rectangle is not None:
                    hit = circle_intersects_rectangle(
                        to_rect_shape(drawable.rectangle), position, ERASER_SIZE
                    )
                else:
                    hit = False
                if hit and not self._connection.send_erase(drawable):
                    print(
                        f"[Client] Failed to send drawable with id {drawable.object_id()}",
                        file=sys.stderr,
                        flush=True,
                    )

    def clear(self) -> None:
        with self._lock:
            self._is_drawing = False
            self._current_line = Line()
            self._current_rectangle = Rectangle()
            self._drawables.clear()

    def drawables(self) -> dict[str, Drawable]:
        """A snapshot of the board's objects keyed by id."""
        with self._lock:
            return dict(self._drawables)

    def _next_id(self) -> str:
        with self._lock:
            object_id = str(self._id_counter)
            self._id_counter += 1
        return object_id

    def _send(self, drawable: Drawable) -> None:
        if not self._connection.send_drawable(drawable):
            print(
                f"[Client] Failed to send drawable with id {drawable.object_id()}",
                file=sys.stderr,
                flush=True,
            )

    @staticmethod
    def _move_end(stroke: Line | Rectangle, position: Position) -> None:
        if stroke.end is not None:
            stroke.end.x, stroke.end.y = float(position[0]), float(position[1])
        else:
            stroke.end = to_point(*position, Color.BLACK)