"""Client side of the whiteboard connection and drawing stream."""

from __future__ import annotations

import queue
import sys
import threading
from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

import grpc

from whiteboard.drawing_service import OPEN_STREAM_METHOD
from whiteboard.drawing_types import ConnectionMessage, Drawable, StreamEvent
from whiteboard.server_manager import CONNECT_METHOD, DISCONNECT_FAILED, DISCONNECT_METHOD

CONNECT_REQUEST = 99
RPC_TIMEOUT_SECONDS = 5.0
NO_CONNECTION = -1

_WRITES_DONE = object()


@runtime_checkable
class DrawingEventListener(Protocol):
    """Receives the events that arrive on the drawing stream."""

    def on_drawable_added(self, drawable: Drawable) -> None: ...

    def on_drawable_erased(self, drawable: Drawable) -> None: ...

    def on_listener_disconnected(self, code: Any, message: str | None) -> None: ...


def _outgoing(outbox: queue.SimpleQueue[Any]) -> Iterator[StreamEvent]:
    while True:
        item = outbox.get()
        if item is _WRITES_DONE:
            return
        yield item


class ServerConnectionManager:
    """Connects to a whiteboard server and exchanges drawing events with it."""

    def __init__(self, target_address: str) -> None:
        self.target_address = target_address
        self._connection_id = NO_CONNECTION
        self._channel: grpc.Channel | None = None
        self._connect_rpc: Any = None
        self._disconnect_rpc: Any = None
        self._open_stream_rpc: Any = None

        self._stream_lock = threading.Lock()
        self._stream_open = False
        self._listener: DrawingEventListener | None = None
        self._call: Any = None
        self._outbox: queue.SimpleQueue[Any] | None = None
        self._reader: threading.Thread | None = None
        self._reader_finished = threading.Event()

    @property
    def connection_id(self) -> int:
        return self._connection_id

    @property
    def stream_open(self) -> bool:
        return self._stream_open

    def __enter__(self) -> ServerConnectionManager:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.disconnect()

    def connect(self) -> bool:
        """Ask the server for a connection id; True on success."""
        print(f"[Client] Opening a connection to {self.target_address}", flush=True)
        channel = grpc.insecure_channel(self.target_address)
        self._channel = channel
        self._connect_rpc = channel.unary_unary(
            CONNECT_METHOD,
            request_serializer=ConnectionMessage.to_bytes,
            response_deserializer=ConnectionMessage.from_bytes,
        )
        self._disconnect_rpc = channel.unary_unary(
            DISCONNECT_METHOD,
            request_serializer=ConnectionMessage.to_bytes,
            response_deserializer=ConnectionMessage.from_bytes,
        )
        try:
            reply = self._connect_rpc(ConnectionMessage(CONNECT_REQUEST), timeout=RPC_TIMEOUT_SECONDS)
        except grpc.RpcError as err:
            print(f"[Client] RPC failed with error code {err.code()}: {err.details()}", flush=True)
            return False

        self._connection_id = reply.connection
        if self._connection_id < 0:
            return False
        self._open_stream_rpc = channel.stream_stream(
            OPEN_STREAM_METHOD,
            request_serializer=StreamEvent.to_bytes,
            response_deserializer=StreamEvent.from_bytes,
        )
        return True

    def disconnect(self) -> bool:
        """Give up the connection id and close the stream; True on success."""
        if self._disconnect_rpc is not None and self._connection_id != NO_CONNECTION:
            try:
                reply = self._disconnect_rpc(
                    ConnectionMessage(self._connection_id), timeout=RPC_TIMEOUT_SECONDS
                )
            except grpc.RpcError as err:
                print(
                    f"[Client] RPC failed with error code {err.code()} "
                    f"and connection id {self._connection_id}",
                    flush=True,
                )
                return False
            if reply.connection == DISCONNECT_FAILED:
                print(
                    f"[Client] RPC failed with error code {grpc.StatusCode.OK} "
                    f"and connection id {reply.connection}",
                    flush=True,
                )
                return False
            self._connect_rpc = None
            self._disconnect_rpc = None
            self._connection_id = NO_CONNECTION

        self.close_subscriber_stream()
        self._open_stream_rpc = None
        if self._channel is not None:
            self._channel.close()
            self._channel = None
        return True

    def open_subscriber_stream(self, listener: DrawingEventListener | None) -> bool:
        """Open the drawing stream and deliver its events to listener."""
        with self._stream_lock:
            if self._open_stream_rpc is None or self._connection_id < 0 or self._stream_open:
                return False
            outbox: queue.SimpleQueue[Any] = queue.SimpleQueue()
            outbox.put(StreamEvent(self._connection_id))
            self._call = self._open_stream_rpc(_outgoing(outbox))
            self._outbox = outbox
            self._listener = listener
            self._reader_finished.clear()
            self._stream_open = True
            self._reader = threading.Thread(
                target=self.read_subscriber_stream, name="drawing-listener", daemon=True
            )
            self._reader.start()
        return True

    def read_subscriber_stream(self) -> None:
        """Deliver incoming events until the stream ends."""
        call = self._call
        listener = self._listener
        if call is None:
            return
        try:
            try:
                for event in call:
                    if not self._stream_open:
                        break
                    if listener is None:
                        continue
                    if event.drawing is not None:
                        listener.on_drawable_added(event.drawing)
                    elif event.erase is not None:
                        listener.on_drawable_erased(event.erase)
                else:
                    if self._stream_open and listener is not None:
                        listener.on_listener_disconnected(call.code(), call.details())
            except grpc.RpcError as err:
                if self._stream_open and listener is not None:
                    listener.on_listener_disconnected(err.code(), err.details())
        finally:
            self._reader_finished.set()

    def close_subscriber_stream(self) -> None:
        """Close the drawing stream; does nothing when it is not open."""
        with self._stream_lock:
            if not self._stream_open:
                return
            self._stream_open = False
            call, outbox, reader = self._call, self._outbox, self._reader

        if outbox is not None:
            outbox.put(_WRITES_DONE)
        if call is not None:
            call.cancel()
        if reader is not None and reader is not threading.current_thread():
            reader.join()

        with self._stream_lock:
            self._call = None
            self._outbox = None
            self._reader = None
            self._listener = None

    def send_drawable(self, drawable: Drawable) -> bool:
        """Send a newly drawn object to the server."""
        return self._send(StreamEvent(self._connection_id, drawing=drawable))

    def send_erase(self, drawable: Drawable) -> bool:
        """Ask the server to erase an object."""
        return self._send(StreamEvent(self._connection_id, erase=drawable))

    def _send(self, event: StreamEvent) -> bool:
        with self._stream_lock:
            if self._outbox is None or not self._stream_open or self._reader_finished.is_set():
                return False
            self._outbox.put(event)
            return True


def _report(message: str) -> None:
    print(message, file=sys.stderr, flush=True)