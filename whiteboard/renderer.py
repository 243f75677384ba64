"""Draws the home page and the whiteboard onto a pygame surface."""

from __future__ import annotations

from collections.abc import Mapping

import pygame

from whiteboard.conversion import line_endpoints, to_rect_shape
from whiteboard.drawing_manager import CursorCircle
from whiteboard.drawing_types import Color, Drawable, Line, Rectangle, RectShape
from whiteboard.event_handlers import (
    BUTTON_HEIGHT,
    BUTTON_WIDTH,
    MENU_BAR_HEIGHT,
    home_button_rects,
    menu_button_rects,
)
from whiteboard.state import DrawTool

TITLE = "WHITEBOARD"
TITLE_SIZE = 48
BUTTON_TEXT_SIZE = 16
TITLE_Y = 200
SELECTED_COLOR = Color(100, 100, 100)


def _rgba(color: Color) -> tuple[int, int, int, int]:
    return (color.r, color.g, color.b, color.a)


class UIRenderer:
    """Renders the client's pages onto a surface."""

    def __init__(self, surface: pygame.Surface, font_path: str | None = None) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self._surface = surface
        self._title_font = pygame.font.Font(font_path, TITLE_SIZE)
        self._button_font = pygame.font.Font(font_path, BUTTON_TEXT_SIZE)

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    def clear(self) -> None:
        self._surface.fill(_rgba(Color.WHITE))

    def display(self) -> None:
        """Show the frame when the surface is the display window."""
        if pygame.display.get_init() and pygame.display.get_surface() is self._surface:
            pygame.display.flip()

    def render_home_screen(self) -> None:
        self._draw_title()
        connect, exit_ = home_button_rects(self._surface.get_size())
        self._draw_button(connect, "CONNECT", Color.BLACK)
        self._draw_button(exit_, "EXIT", Color.BLACK)

    def render_whiteboard(
        self,
        drawables: Mapping[str, Drawable],
        current_line: Line,
        current_rectangle: Rectangle,
        cursor_circle: CursorCircle,
        is_drawing: bool,
        current_tool: DrawTool,
    ) -> None:
        self._render_drawings(drawables, current_line, current_rectangle, is_drawing, current_tool)
        if is_drawing and current_tool is DrawTool.ERASER:
            self._draw_circle(cursor_circle)
        self._render_menu_bar(current_tool)

    def _render_drawings(
        self,
        drawables: Mapping[str, Drawable],
        current_line: Line,
        current_rectangle: Rectangle,
        is_drawing: bool,
        current_tool: DrawTool,
    ) -> None:
        for drawable in drawables.values():
            if drawable.line is not None and drawable.line.complete:
                self._draw_line(drawable.line)
            elif drawable.rectangle is not None and drawable.rectangle.complete:
                self._draw_shape(to_rect_shape(drawable.rectangle))
        if is_drawing and current_tool is DrawTool.MARKER and current_line.complete:
            self._draw_line(current_line)
        if is_drawing and current_tool is DrawTool.RECTANGLE and current_rectangle.complete:
            self._draw_shape(to_rect_shape(current_rectangle))

    def _render_menu_bar(self, current_tool: DrawTool) -> None:
        width = self._surface.get_size()[0]
        self._outlined_rect((0, 0, width, MENU_BAR_HEIGHT), Color.WHITE, Color.BLACK, 2)
        home, *tool_buttons = menu_button_rects()
        self._draw_button(home, "HOME", Color.BLACK)
        for rect, tool in zip(tool_buttons, DrawTool):
            color = SELECTED_COLOR if tool is current_tool else Color.BLACK
            self._draw_button(rect, tool.label, color)

    def _draw_title(self) -> None:
        text = self._title_font.render(TITLE, True, _rgba(Color.BLACK))
        x = self._surface.get_size()[0] / 2 - text.get_width() / 2
        self._surface.blit(text, (round(x), TITLE_Y))

    def _draw_button(self, rect: tuple[float, float, float, float], label: str, color: Color) -> None:
        x, y, width, height = rect
        self._outlined_rect((x, y, width, height), Color.WHITE, color, 2)
        text = self._button_font.render(label, True, _rgba(color))
        text_x = x + width / 2 - text.get_width() / 2
        text_y = y + height / 2 - text.get_height() / 2
        self._surface.blit(text, (round(text_x), round(text_y)))

    def _outlined_rect(
        self,
        rect: tuple[float, float, float, float],
        fill: Color,
        outline: Color,
        thickness: float,
    ) -> None:
        x, y, width, height = (round(v) for v in rect)
        t = round(thickness)
        if fill.a > 0:
            pygame.draw.rect(self._surface, _rgba(fill), (x, y, width, height))
        if t > 0:
            pygame.draw.rect(
                self._surface, _rgba(outline), (x - t, y - t, width + 2 * t, height + 2 * t), t
            )

    def _draw_line(self, line: Line) -> None:
        (start, color), (end, _) = line_endpoints(line)
        pygame.draw.line(
            self._surface,
            _rgba(color),
            (round(start[0]), round(start[1])),
            (round(end[0]), round(end[1])),
        )

    def _draw_shape(self, shape: RectShape) -> None:
        self._outlined_rect(
            (shape.x, shape.y, shape.width, shape.height),
            shape.fill_color,
            shape.outline_color,
            shape.outline_thickness,
        )

    def _draw_circle(self, circle: CursorCircle) -> None:
        cx, cy = circle.center
        centre = (round(cx), round(cy))
        thickness = round(circle.outline_thickness)
        if thickness > 0:
            pygame.draw.circle(
                self._surface,
                _rgba(circle.outline_color),
                centre,
                round(circle.radius) + thickness,
                thickness,
            )
        pygame.draw.circle(self._surface, _rgba(Color.WHITE), centre, round(circle.radius))


__all__ = ["UIRenderer", "BUTTON_WIDTH", "BUTTON_HEIGHT"]