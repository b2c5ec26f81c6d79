"""gRPC transport for monitor snapshots: an in-memory store, its server and a client."""

import copy
import logging
import threading
from concurrent import futures

import grpc

from .messages import MonitorInfo, SoftIrq, decode_monitor_info, encode_monitor_info

SERVICE_NAME = "monitor.proto.GrpcManager"
DEFAULT_TARGET = "localhost:50051"

_SET_METHOD = f"/{SERVICE_NAME}/SetMonitorInfo"
_GET_METHOD = f"/{SERVICE_NAME}/GetMonitorInfo"

# An empty message travels as its raw (empty) encoding; bytes() serves both ways.
_EMPTY = b""

_log = logging.getLogger(__name__)


class RpcConnectionError(ConnectionError):
    """Raised when a call to the monitor server fails."""


class MonitorStore:
    """Holds the most recent snapshot reported by a collector."""

    def __init__(self):
        self._lock = threading.Lock()
        self._info = MonitorInfo()

    def set_monitor_info(self, request):
        """Replace the stored snapshot with a copy of *request*."""
        snapshot = copy.deepcopy(request)
        with self._lock:
            self._info = snapshot
        _log.debug("stored snapshot with %d soft_irq rows", len(snapshot.soft_irq))

    def get_monitor_info(self):
        """Return a copy of the stored snapshot."""
        with self._lock:
            return copy.deepcopy(self._info)


def _generic_handler(store):
    def set_monitor_info(request, _context):
        store.set_monitor_info(request)
        return _EMPTY

    def get_monitor_info(_request, _context):
        return store.get_monitor_info()

    return grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            "SetMonitorInfo": grpc.unary_unary_rpc_method_handler(
                set_monitor_info,
                request_deserializer=decode_monitor_info,
                response_serializer=bytes,
            ),
            "GetMonitorInfo": grpc.unary_unary_rpc_method_handler(
                get_monitor_info,
                request_deserializer=bytes,
                response_serializer=encode_monitor_info,
            ),
        },
    )


def create_server(address, store):
    """Build an unstarted server for *store* bound to *address*.

    Returns the server and the port it is bound to.
    """
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=10))
    server.add_generic_rpc_handlers((_generic_handler(store),))
    try:
        port = server.add_insecure_port(address)
    except RuntimeError as exc:
        raise OSError(f"cannot listen on {address}: {exc}") from exc
    if port == 0:
        raise OSError(f"cannot listen on {address}")
    return server, port


class RpcClient:
    """Client for the monitor server."""

    def __init__(self, target=DEFAULT_TARGET):
        self.target = target
        self._channel = grpc.insecure_channel(target)
        self._set = self._channel.unary_unary(
            _SET_METHOD,
            request_serializer=encode_monitor_info,
            response_deserializer=bytes,
        )
        self._get = self._channel.unary_unary(
            _GET_METHOD,
            request_serializer=bytes,
            response_deserializer=decode_monitor_info,
        )

    def set_monitor_info(self, monitor_info):
        """Send a snapshot to the server."""
        try:
            self._set(monitor_info)
        except grpc.RpcError as exc:
            raise RpcConnectionError(f"failed to connect to {self.target}: {exc.details()}") from exc

    def get_monitor_info(self):
        """Fetch the latest snapshot from the server."""
        try:
            return self._get(_EMPTY)
        except grpc.RpcError as exc:
            raise RpcConnectionError(f"failed to connect to {self.target}: {exc.details()}") from exc

    def close(self):
        """Close the underlying channel."""
        self._channel.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def send_sample_info(client):
    """Send a small snapshot with two named CPUs and return it."""
    info = MonitorInfo(soft_irq=[SoftIrq(cpu="cpu1"), SoftIrq(cpu="cpu2")])
    client.set_monitor_info(info)
    return info