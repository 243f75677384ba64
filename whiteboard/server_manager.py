"""Whiteboard server: connection bookkeeping and the gRPC endpoint."""

from __future__ import annotations

import sys
import threading
import uuid
from concurrent import futures
from typing import Any

import grpc

from whiteboard.drawing_service import DrawingService
from whiteboard.drawing_types import ConnectionMessage

DEFAULT_ADDRESS = "localhost:50052"
CONNECTION_SERVICE_NAME = "Whiteboard.Server.ServerConnectionService"
CONNECT_METHOD = f"/{CONNECTION_SERVICE_NAME}/Connect"
DISCONNECT_METHOD = f"/{CONNECTION_SERVICE_NAME}/Disconnect"
DISCONNECT_CONFIRMED = 99
DISCONNECT_FAILED = 98

_MAX_WORKERS = 32


class ServerConnectionService(grpc.GenericRpcHandler):
    """Hands out and withdraws connection ids."""

    def __init__(self, manager: ServerManager) -> None:
        self._manager = manager
        self._handlers = {
            CONNECT_METHOD: grpc.unary_unary_rpc_method_handler(
                self.connect,
                request_deserializer=ConnectionMessage.from_bytes,
                response_serializer=ConnectionMessage.to_bytes,
            ),
            DISCONNECT_METHOD: grpc.unary_unary_rpc_method_handler(
                self.disconnect,
                request_deserializer=ConnectionMessage.from_bytes,
                response_serializer=ConnectionMessage.to_bytes,
            ),
        }

    def service(self, handler_call_details: Any) -> grpc.RpcMethodHandler | None:
        return self._handlers.get(handler_call_details.method)

    def connect(self, request: ConnectionMessage, context: Any) -> ConnectionMessage:
        connection_id = self._manager.connect(context.peer())
        print(f"[Server Thread] Opened client with input connection: {connection_id}", flush=True)
        return ConnectionMessage(connection_id)

    def disconnect(self, request: ConnectionMessage, context: Any) -> ConnectionMessage:
        disconnected = self._manager.disconnect(request.connection)
        print(f"[Server Thread] Closed client with input connection: {request.connection}", flush=True)
        return ConnectionMessage(DISCONNECT_CONFIRMED if disconnected else DISCONNECT_FAILED)


class ServerManager:
    """Tracks open clients and runs the gRPC server."""

    def __init__(self, target_address: str) -> None:
        self.target_address = target_address
        self.drawing_service = DrawingService(self)
        self._num_connections = 0
        self._open_clients: dict[int, str] = {}
        self._connection_lock = threading.Lock()
        self._server: grpc.Server | None = None
        self._server_lock = threading.Lock()
        self._stop_requested = False

    def connect(self, peer_address: str) -> int:
        """Register a client and return its new connection id, or -1."""
        with self._connection_lock:
            connection_id = self.assign_new_connection_id(peer_address)
            if connection_id >= 0:
                self._open_clients[connection_id] = peer_address
                return connection_id
            return -1

    def disconnect(self, connection_id: int) -> bool:
        """True only if both the client's stream and its connection were closed."""
        closed_stream = self.drawing_service.close_drawing_stream(connection_id)
        return closed_stream and self.remove_connection_id(connection_id)

    def start(self) -> None:
        """Serve until stop() is called; blocks the calling thread."""
        with self._server_lock:
            if self._stop_requested:
                return
            server = grpc.server(futures.ThreadPoolExecutor(max_workers=_MAX_WORKERS))
            server.add_generic_rpc_handlers((ServerConnectionService(self), self.drawing_service))
            try:
                port = server.add_insecure_port(self.target_address)
            except RuntimeError:
                port = 0
            if not port:
                print(f"[Server Thread] Failed to start server on {self.target_address}", file=sys.stderr, flush=True)
                return
            server.start()
            self._server = server
        print(f"[Server Thread] Server listening on {self.target_address}", flush=True)
        server.wait_for_termination()
        print("[Server Thread] Server shutdown complete.", flush=True)

    def stop(self) -> None:
        """Shut the server down, allowing a one second grace period."""
        with self._server_lock:
            self._stop_requested = True
            server = self._server
        if server is not None:
            server.stop(1)

    def update(self) -> list[int]:
        """Periodic housekeeping: return the ids of the clients currently open, in order."""
        with self._connection_lock:
            return sorted(self._open_clients)

    def assign_new_connection_id(self, peer_address: str) -> int:
        connection_id = self._num_connections
        self._num_connections += 1
        return connection_id

    def is_valid_connection_id(self, connection_id: int) -> bool:
        with self._connection_lock:
            return connection_id in self._open_clients

    def remove_connection_id(self, connection_id: int) -> bool:
        with self._connection_lock:
            return self._open_clients.pop(connection_id, None) is not None

    def reserve_object_id(self) -> str:
        """A random version-4 UUID string."""
        return str(uuid.uuid4())


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    address = args[0] if args else DEFAULT_ADDRESS
    manager = ServerManager(address)
    server_thread = threading.Thread(target=manager.start, name="server")
    server_thread.start()

    print(f"Server running at address {address}. Press Enter to stop...", flush=True)
    try:
        input()
    except EOFError:
        pass

    manager.stop()
    server_thread.join()
    return 0