"""Whiteboard data model and its wire encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, ClassVar

Position = tuple[float, float]


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    TRANSPARENT: ClassVar[Color]

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            channel = getattr(self, name)
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel {name}={channel} is outside 0..255")


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.TRANSPARENT = Color(0, 0, 0, 0)


@dataclass
class Point:
    """A point on the board with a packed RGBA colour."""

    x: float = 0.0
    y: float = 0.0
    color: int = 0

    @property
    def position(self) -> Position:
        return (self.x, self.y)


@dataclass
class _Stroke:
    id: str = ""
    start: Point | None = None
    end: Point | None = None

    @property
    def complete(self) -> bool:
        """True when both end points are set."""
        return self.start is not None and self.end is not None


@dataclass
class Line(_Stroke):
    """A straight line between two points."""


@dataclass
class Rectangle(_Stroke):
    """An axis-aligned rectangle spanned by two opposite corners."""


@dataclass
class RectShape:
    """A renderable rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    outline_color: Color = Color(0, 0, 0)
    outline_thickness: float = 1.0
    fill_color: Color = Color(0, 0, 0, 0)

    @property
    def top_left(self) -> Position:
        return (self.x, self.y)

    @property
    def bottom_right(self) -> Position:
        return (self.x + self.width, self.y + self.height)

    @property
    def size(self) -> Position:
        return (self.width, self.height)


@dataclass
class Drawable:
    """An object on the board: either a line or a rectangle."""

    line: Line | None = None
    rectangle: Rectangle | None = None

    def __post_init__(self) -> None:
        if self.line is not None and self.rectangle is not None:
            raise ValueError("a drawable holds either a line or a rectangle, not both")

    def object_id(self) -> str:
        """The id of the held object, or an empty string."""
        if self.line is not None:
            return self.line.id
        if self.rectangle is not None:
            return self.rectangle.id
        return ""


@dataclass
class StreamEvent:
    """A message on the drawing stream: a drawable added or erased."""

    connection_id: int = 0
    drawing: Drawable | None = None
    erase: Drawable | None = None

    def __post_init__(self) -> None:
        if self.drawing is not None and self.erase is not None:
            raise ValueError("a stream event is either a drawing or an erase event")

    def to_bytes(self) -> bytes:
        payload: dict[str, Any] = {"connection_id": self.connection_id}
        if self.drawing is not None:
            payload["drawing"] = _drawable_to_dict(self.drawing)
        elif self.erase is not None:
            payload["erase"] = _drawable_to_dict(self.erase)
        return _encode(payload)

    @staticmethod
    def from_bytes(data: bytes) -> StreamEvent:
        payload = _decode(data)
        try:
            drawing = payload.get("drawing")
            erase = payload.get("erase")
            return StreamEvent(
                connection_id=int(payload.get("connection_id", 0)),
                drawing=None if drawing is None else _drawable_from_dict(drawing),
                erase=None if erase is None else _drawable_from_dict(erase),
            )
        except (TypeError, AttributeError, ValueError) as exc:
            raise ValueError(f"malformed stream event: {exc}") from exc


@dataclass
class ConnectionMessage:
    """A connection request or confirmation carrying a connection number."""

    connection: int = 0

    def to_bytes(self) -> bytes:
        return _encode({"connection": self.connection})

    @staticmethod
    def from_bytes(data: bytes) -> ConnectionMessage:
        payload = _decode(data)
        try:
            return ConnectionMessage(int(payload.get("connection", 0)))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"malformed connection message: {exc}") from exc


def _encode(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def _decode(data: bytes) -> dict[str, Any]:
    payload = json.loads(data.decode("utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("message payload must be an object")
    return payload


def _point_to_dict(point: Point) -> dict[str, Any]:
    return {"x": point.x, "y": point.y, "color": point.color}


def _point_from_dict(data: dict[str, Any]) -> Point:
    return Point(float(data.get("x", 0.0)), float(data.get("y", 0.0)), int(data.get("color", 0)))


def _stroke_to_dict(stroke: _Stroke) -> dict[str, Any]:
    result: dict[str, Any] = {"id": stroke.id}
    if stroke.start is not None:
        result["start"] = _point_to_dict(stroke.start)
    if stroke.end is not None:
        result["end"] = _point_to_dict(stroke.end)
    return result


def _stroke_fields(data: dict[str, Any]) -> dict[str, Any]:
    start = data.get("start")
    end = data.get("end")
    object_id = data.get("id", "")
    if not isinstance(object_id, str):
        raise ValueError("object id must be a string")
    return {
        "id": object_id,
        "start": None if start is None else _point_from_dict(start),
        "end": None if end is None else _point_from_dict(end),
    }


def _drawable_to_dict(drawable: Drawable) -> dict[str, Any]:
    if drawable.line is not None:
        return {"line": _stroke_to_dict(drawable.line)}
    if drawable.rectangle is not None:
        return {"rectangle": _stroke_to_dict(drawable.rectangle)}
    return {}


def _drawable_from_dict(data: dict[str, Any]) -> Drawable:
    line = data.get("line")
    rectangle = data.get("rectangle")
    return Drawable(
        line=None if line is None else Line(**_stroke_fields(line)),
        rectangle=None if rectangle is None else Rectangle(**_stroke_fields(rectangle)),
    )