"""Server side of the shared drawing stream."""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterable, Iterator
from typing import Any, Protocol

import grpc

from whiteboard.drawing_types import Drawable, StreamEvent

SERVICE_NAME = "Whiteboard.Drawing.DrawingService"
OPEN_STREAM_METHOD = f"/{SERVICE_NAME}/OpenDrawingStream"
SERVER_CONNECTION_ID = -1

_CLOSED = object()


class _ConnectionRegistry(Protocol):
    def is_valid_connection_id(self, connection_id: int) -> bool: ...


class ClientConnection:
    """The outgoing half of one client's drawing stream."""

    def __init__(self, connection_id: int) -> None:
        self._connection_id = connection_id
        self._outbox: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def connection_id(self) -> int:
        return self._connection_id

    @property
    def closed(self) -> bool:
        return self._closed

    def send_event(self, event: StreamEvent) -> bool:
        """Queue an event for the client; False once the connection is closed."""
        with self._lock:
            if self._closed:
                return False
            self._outbox.put(event)
            return True

    def close(self) -> None:
        """End the outgoing stream after the events already queued."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._outbox.put(_CLOSED)

    def events(self) -> Iterator[StreamEvent]:
        """Yield queued events until the connection is closed."""
        while True:
            item = self._outbox.get()
            if item is _CLOSED:
                return
            yield item


class DrawingService(grpc.GenericRpcHandler):
    """Keeps the board's objects and relays drawing events to every client."""

    def __init__(self, server_manager: _ConnectionRegistry) -> None:
        self._server_manager = server_manager
        self._active_streams: list[ClientConnection] = []
        self._streams_lock = threading.Lock()
        self._drawn_objects: dict[str, Drawable] = {}
        self._objects_lock = threading.Lock()
        self._handler = grpc.stream_stream_rpc_method_handler(
            self.open_drawing_stream,
            request_deserializer=StreamEvent.from_bytes,
            response_serializer=StreamEvent.to_bytes,
        )

    def service(self, handler_call_details: Any) -> grpc.RpcMethodHandler | None:
        if handler_call_details.method == OPEN_STREAM_METHOD:
            return self._handler
        return None

    def open_drawing_stream(
        self, request_iterator: Iterable[StreamEvent], context: Any
    ) -> Iterator[StreamEvent]:
        """Serve one client's bidirectional stream.

        The first event must carry a connection id known to the server manager.
        """
        requests = iter(request_iterator)
        initial = next(requests, None)
        if initial is None or not self._server_manager.is_valid_connection_id(initial.connection_id):
            context.abort(grpc.StatusCode.UNAUTHENTICATED, "Invalid connection ID")
            return

        connection = ClientConnection(initial.connection_id)
        with self._streams_lock:
            self._active_streams.append(connection)
        self._send_drawables_to(connection)
        context.add_callback(connection.close)

        reader = threading.Thread(
            target=self._read_stream,
            args=(requests, connection),
            name=f"drawing-stream-{connection.connection_id}",
            daemon=True,
        )
        reader.start()
        yield from connection.events()

    def close_drawing_stream(self, connection_id: int) -> bool:
        """Stop relaying events to the stream of connection_id."""
        with self._streams_lock:
            for connection in self._active_streams:
                if connection.connection_id == connection_id:
                    self._active_streams.remove(connection)
                    return True
        return False

    def broadcast_drawable(self, drawable: Drawable) -> None:
        """Record a new object and send it to every open stream."""
        object_id = drawable.object_id()
        if not object_id:
            return
        with self._objects_lock:
            self._drawn_objects.setdefault(object_id, drawable)
        self._broadcast(StreamEvent(SERVER_CONNECTION_ID, drawing=drawable))

    def broadcast_erase(self, drawable: Drawable) -> None:
        """Forget an object and tell every open stream to erase it."""
        object_id = drawable.object_id()
        if not object_id:
            return
        with self._objects_lock:
            self._drawn_objects.pop(object_id, None)
        self._broadcast(StreamEvent(SERVER_CONNECTION_ID, erase=drawable))

    def _broadcast(self, event: StreamEvent) -> None:
        with self._streams_lock:
            for connection in self._active_streams:
                connection.send_event(event)

    def _send_drawables_to(self, connection: ClientConnection) -> None:
        with self._objects_lock:
            for drawable in self._drawn_objects.values():
                connection.send_event(StreamEvent(SERVER_CONNECTION_ID, drawing=drawable))

    def _read_stream(self, requests: Iterator[StreamEvent], connection: ClientConnection) -> None:
        try:
            for event in requests:
                if event.connection_id != connection.connection_id:
                    continue
                if event.drawing is not None:
                    self.broadcast_drawable(event.drawing)
                elif event.erase is not None:
                    self.broadcast_erase(event.erase)
        except grpc.RpcError:
            pass
        finally:
            connection.close()