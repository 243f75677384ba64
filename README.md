# whiteboard

A shared whiteboard. One server holds the drawing. Any number of clients
connect to it, draw lines and rectangles, erase shapes, and see each
other's changes as they happen.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
whiteboard-server
```

By default the server listens on `localhost:50052`. To listen on another
address, pass it as the only argument:

```
whiteboard-server 0.0.0.0:50052
```

Press Enter in the server's terminal to shut it down. Shutdown allows a
one-second grace period.

## Running a client

```
whiteboard-client
```

The client opens a 1024×768 pygame window and uses the server at
`localhost:50052`. To use another server, pass its address as the only
argument:

```
whiteboard-client otherhost:50052
```

The client looks for the font `assets/fonts/KodeMono-VariableFont_wght.ttf`
relative to the working directory, and in `../../assets/fonts` and
`../../../assets/fonts`. If it finds none of these, it prints
`Error loading font` and uses pygame's default font.

### Home screen

- **CONNECT** asks the server for a connection and opens the drawing
  stream. The shapes already on the board are sent to the client as soon as
  it joins. If the connection fails, the client stays on the home screen.
- **EXIT** closes the application.

### Whiteboard page

The menu bar along the top holds four buttons:

- **HOME** disconnects and returns to the home screen. The local copy of
  the board is cleared.
- **MARKER** draws straight black lines. Click to start, move the mouse,
  and click again to finish.
- **RECTANGLE** draws black rectangle outlines in the same way.
- **ERASER** works while the left button is held down. Each shape whose
  line, or whose rectangle outline, comes within 20 pixels of the pointer
  is erased for every client. Releasing the button, or moving into the
  menu bar, stops erasing.

A right click cancels the shape that is being drawn. Picking another tool
from the menu also cancels it.

## Using the package from Python

| Module | Contents |
| --- | --- |
| `whiteboard.drawing_types` | Data model: `Color`, `Point`, `Line`, `Rectangle`, `RectShape`, `Drawable`, and the messages `StreamEvent` and `ConnectionMessage` with `to_bytes()` / `from_bytes()` |
| `whiteboard.conversion` | `pack_color` / `unpack_color` (0xRRGGBBAA), `to_point`, `to_line`, `to_rectangle`, `to_rect_shape`, `shape_to_rectangle`, `line_endpoints` |
| `whiteboard.geometry` | Eraser hit tests: `circle_intersects_segment`, `circle_intersects_line`, `circle_intersects_rectangle` |
| `whiteboard.state` | `AppState`, `DrawTool`, `EventResult` |
| `whiteboard.drawing_service` | `DrawingService` (the drawing stream's gRPC handler) and `ClientConnection` |
| `whiteboard.server_manager` | `ServerManager`, `ServerConnectionService`, and `main` |
| `whiteboard.connection_manager` | `ServerConnectionManager` (client connection and stream) and the `DrawingEventListener` protocol |
| `whiteboard.drawing_manager` | `DrawingManager` (client drawing state) and `CursorCircle` |
| `whiteboard.event_handlers` | Input events (`CloseEvent`, `MousePressed`, `MouseReleased`, `MouseMoved`, `MouseButton`) and the `HomePageEventHandler` / `WhiteboardPageEventHandler` |
| `whiteboard.renderer` | `UIRenderer`, which draws onto a pygame surface |
| `whiteboard.app` | `WhiteboardClientApp`, `translate_event`, and `main` |

An example:

```python
from whiteboard.drawing_types import Color
from whiteboard.conversion import to_line
from whiteboard.geometry import circle_intersects_line

line = to_line((0.0, 0.0), (100.0, 0.0), Color(0, 0, 0), "1")
circle_intersects_line(line, (50.0, 10.0), 20.0)   # True
```

The server can be embedded as well. `ServerManager(address)` takes the
address to listen on. `start()` serves until `stop()` is called from
another thread. `connect(peer)` and `disconnect(connection_id)` manage the
connection ids that it hands out.

Messages travel as JSON bodies over gRPC. The services are
`Whiteboard.Server.ServerConnectionService` (`Connect`, `Disconnect`) and
`Whiteboard.Drawing.DrawingService` (`OpenDrawingStream`).

## What it does not do

- The board exists only in the server's memory. Nothing is saved, and the
  drawing is lost when the server stops.
- Connections are plain, insecure gRPC with no authentication beyond the
  connection id the server hands out.
- There are no colours, line widths, or undo. Every shape is drawn in
  black.