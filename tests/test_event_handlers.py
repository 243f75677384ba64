import pytest

from whiteboard.event_handlers import (
    BUTTON_HEIGHT,
    BUTTON_WIDTH,
    MENU_BAR_HEIGHT,
    CloseEvent,
    HomePageEventHandler,
    MouseButton,
    MouseMoved,
    MousePressed,
    MouseReleased,
    WhiteboardPageEventHandler,
    home_button_rects,
    menu_button_rects,
)
from whiteboard.state import DrawTool, EventResult


class FakeWindow:
    def __init__(self, size=(1024, 768)):
        self.size = size

    def get_size(self):
        return self.size


class RecordingManager:
    def __init__(self, is_drawing=False):
        self.is_drawing = is_drawing
        self.calls = []

    def start_drawing(self, position, tool):
        self.calls.append(("start", position, tool))

    def update_drawing(self, position, tool):
        self.calls.append(("update", position, tool))

    def end_drawing_and_update(self, tool):
        self.calls.append(("end", tool))

    def stop_drawing(self, tool):
        self.calls.append(("stop", tool))


def _centre(rect):
    x, y, w, h = rect
    return (x + w / 2, y + h / 2)


@pytest.fixture
def home():
    return HomePageEventHandler(FakeWindow())


def test_home_close_event(home):
    assert home.handle_event(CloseEvent(), DrawTool.RECTANGLE) == (
        EventResult.ATTEMPT_CLOSE_APPLICATION,
        DrawTool.RECTANGLE,
    )


def test_home_connect_button(home):
    connect, _ = home_button_rects((1024, 768))
    x, y = _centre(connect)
    result, tool = home.handle_event(MousePressed(MouseButton.LEFT, x, y), DrawTool.MARKER)
    assert result is EventResult.ATTEMPT_CONNECTION
    assert tool is DrawTool.MARKER


def test_home_exit_button(home):
    _, exit_ = home_button_rects((1024, 768))
    x, y = _centre(exit_)
    result, _ = home.handle_event(MousePressed(MouseButton.LEFT, x, y), DrawTool.MARKER)
    assert result is EventResult.ATTEMPT_CLOSE_APPLICATION


def test_home_buttons_are_centred(home):
    connect, exit_ = home_button_rects((1024, 768))
    assert connect[0] + BUTTON_WIDTH / 2 == 512
    assert connect[1] == 384
    assert exit_[0] == connect[0]
    assert exit_[1] > connect[1] + BUTTON_HEIGHT


def test_home_button_edges_half_open(home):
    connect, _ = home_button_rects((1024, 768))
    x, y, w, h = connect
    inside, _ = home.handle_event(MousePressed(MouseButton.LEFT, x, y), DrawTool.MARKER)
    outside, _ = home.handle_event(MousePressed(MouseButton.LEFT, x + w, y), DrawTool.MARKER)
    assert inside is EventResult.ATTEMPT_CONNECTION
    assert outside is EventResult.SUCCESS


def test_home_right_click_ignored(home):
    connect, _ = home_button_rects((1024, 768))
    result, _ = home.handle_event(MousePressed(MouseButton.RIGHT, *_centre(connect)), DrawTool.MARKER)
    assert result is EventResult.SUCCESS


def test_home_click_elsewhere(home):
    result, _ = home.handle_event(MousePressed(MouseButton.LEFT, 0, 0), DrawTool.MARKER)
    assert result is EventResult.SUCCESS


def _board(is_drawing=False):
    manager = RecordingManager(is_drawing)
    return WhiteboardPageEventHandler(FakeWindow(), manager), manager


def test_menu_layout_has_home_and_tools():
    rects = menu_button_rects()
    assert len(rects) == 1 + len(DrawTool)
    for left, right in zip(rects, rects[1:]):
        assert right[0] - left[0] == BUTTON_WIDTH + 10
    assert all(r[1] + r[3] <= MENU_BAR_HEIGHT for r in rects)


def test_board_close_event():
    handler, manager = _board()
    assert handler.handle_event(CloseEvent(), DrawTool.MARKER)[0] is EventResult.ATTEMPT_CLOSE_APPLICATION
    assert manager.calls == []


def test_home_menu_button_disconnects():
    handler, manager = _board()
    home_rect = menu_button_rects()[0]
    result, tool = handler.handle_event(MousePressed(MouseButton.LEFT, *_centre(home_rect)), DrawTool.ERASER)
    assert result is EventResult.ATTEMPT_DISCONNECTION
    assert tool is DrawTool.ERASER
    assert manager.calls == []


@pytest.mark.parametrize("index,expected", [(1, DrawTool.MARKER), (2, DrawTool.RECTANGLE), (3, DrawTool.ERASER)])
def test_tool_buttons_select_tool(index, expected):
    handler, manager = _board()
    rect = menu_button_rects()[index]
    result, tool = handler.handle_event(MousePressed(MouseButton.LEFT, *_centre(rect)), DrawTool.ERASER)
    assert result is EventResult.SUCCESS
    assert tool is expected
    assert manager.calls == [("stop", DrawTool.ERASER)]


def test_menu_bar_click_off_buttons():
    handler, manager = _board()
    result, tool = handler.handle_event(MousePressed(MouseButton.LEFT, 900, 20), DrawTool.RECTANGLE)
    assert (result, tool) == (EventResult.SUCCESS, DrawTool.RECTANGLE)
    assert manager.calls == []


def test_left_click_on_canvas_starts_drawing():
    handler, manager = _board()
    handler.handle_event(MousePressed(MouseButton.LEFT, 300, 400), DrawTool.MARKER)
    assert manager.calls == [("start", (300.0, 400.0), DrawTool.MARKER)]


def test_left_click_while_drawing_ends():
    handler, manager = _board(is_drawing=True)
    handler.handle_event(MousePressed(MouseButton.LEFT, 300, 400), DrawTool.RECTANGLE)
    assert manager.calls == [("end", DrawTool.RECTANGLE)]


def test_menu_bar_boundary_includes_outline():
    handler, manager = _board()
    handler.handle_event(MousePressed(MouseButton.LEFT, 900, MENU_BAR_HEIGHT + 1), DrawTool.MARKER)
    assert manager.calls == []
    handler.handle_event(MousePressed(MouseButton.LEFT, 900, MENU_BAR_HEIGHT + 2), DrawTool.MARKER)
    assert manager.calls == [("start", (900.0, float(MENU_BAR_HEIGHT + 2)), DrawTool.MARKER)]


def test_right_click_stops_only_when_drawing():
    handler, manager = _board()
    handler.handle_event(MousePressed(MouseButton.RIGHT, 300, 400), DrawTool.MARKER)
    assert manager.calls == []
    manager.is_drawing = True
    handler.handle_event(MousePressed(MouseButton.RIGHT, 300, 400), DrawTool.MARKER)
    assert manager.calls == [("stop", DrawTool.MARKER)]


@pytest.mark.parametrize("tool,expected", [(DrawTool.ERASER, [("end", DrawTool.ERASER)]), (DrawTool.MARKER, [])])
def test_release_ends_only_eraser(tool, expected):
    handler, manager = _board(is_drawing=True)
    handler.handle_event(MouseReleased(MouseButton.LEFT, 300, 400), tool)
    assert manager.calls == expected


def test_move_on_canvas_updates_when_drawing():
    handler, manager = _board(is_drawing=True)
    handler.handle_event(MouseMoved(310, 420), DrawTool.MARKER)
    assert manager.calls == [("update", (310.0, 420.0), DrawTool.MARKER)]


def test_move_on_canvas_idle_does_nothing():
    handler, manager = _board()
    result, _ = handler.handle_event(MouseMoved(310, 420), DrawTool.MARKER)
    assert result is EventResult.SUCCESS
    assert manager.calls == []


def test_move_into_menu_ends_eraser():
    handler, manager = _board(is_drawing=True)
    handler.handle_event(MouseMoved(500, 20), DrawTool.ERASER)
    handler.handle_event(MouseMoved(500, 20), DrawTool.MARKER)
    assert manager.calls == [("end", DrawTool.ERASER)]