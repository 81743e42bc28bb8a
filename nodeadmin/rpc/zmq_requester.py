"""ZeroMQ REQ requester.

Sends the same JSON-RPC envelope as the HTTP requester over a REQ socket
and expects one JSON reply per request.
"""
from __future__ import annotations

import threading
from typing import Any, Optional

try:  # optional
    import zmq  # type: ignore
except ImportError:  # pragma: no cover - optional
    zmq = None  # type: ignore

from ..core.errors import DecodeError, NodeAdminError, TransportError
from ..telemetry.logging import get_logger
from ..telemetry.metrics import Timer
from .requester import RequestMetrics, build_envelope, handle_response


class ZMQRequester:
    def __init__(
        self,
        endpoint: str = "tcp://127.0.0.1:5555",
        namespace: str = "",
        timeout_s: float = 10.0,
        context: Optional["zmq.Context"] = None,
    ) -> None:
        if zmq is None:
            raise RuntimeError("pyzmq not installed; install with 'pip install .[zmq]'")
        self.endpoint = endpoint
        self.namespace = namespace
        self._timeout_ms = max(1, int(timeout_s * 1000))
        self._ctx = context or zmq.Context.instance()
        # REQ sockets must strictly alternate send/recv.
        self._lock = threading.Lock()
        self._sock = self._connect()
        self._metrics = RequestMetrics("zmq")
        self._log = get_logger("ZMQRequester", {"endpoint": endpoint})

    def _connect(self):  # noqa: ANN202
        sock = self._ctx.socket(zmq.REQ)
        sock.setsockopt(zmq.RCVTIMEO, self._timeout_ms)
        sock.setsockopt(zmq.SNDTIMEO, self._timeout_ms)
        sock.setsockopt(zmq.LINGER, 0)
        try:
            sock.connect(self.endpoint)
        except zmq.ZMQError as exc:
            sock.close(linger=0)
            raise TransportError(f"cannot connect to {self.endpoint}: {exc}") from exc
        return sock

    def send_request(self, method: str, params: Any, reply: Any) -> None:
        envelope = build_envelope(self.namespace, method, params)
        timer = Timer(method)
        ok = False
        try:
            with timer:
                body = self._roundtrip(envelope)
                try:
                    handle_response(body, reply)
                except NodeAdminError as exc:
                    self._log.warning(f"{envelope['method']} failed: {exc}")
                    raise
            ok = True
        finally:
            self._metrics.record(method, timer.elapsed, ok)
        self._log.debug(f"{envelope['method']} id={envelope['id']} took {timer.elapsed_ms:.1f}ms")

    def _roundtrip(self, envelope: dict) -> Any:
        name = envelope["method"]
        with self._lock:
            try:
                self._sock.send_json(envelope)
                return self._sock.recv_json()
            except zmq.Again as exc:
                self._log.warning(f"{name} timed out")
                # A REQ socket that missed its reply cannot send again; start over.
                self._reconnect()
                raise TransportError(f"timeout calling {name}") from exc
            except zmq.ZMQError as exc:
                self._log.warning(f"{name} zmq error: {exc}")
                self._reconnect()
                raise TransportError(f"zmq error calling {name}: {exc}") from exc
            except ValueError as exc:
                self._log.warning(f"{name} non-json reply")
                raise DecodeError(f"non-json reply calling {name}") from exc

    def _reconnect(self) -> None:
        self._sock.close(linger=0)
        self._sock = self._connect()

    def close(self) -> None:
        with self._lock:
            self._sock.close(linger=0)

    def __enter__(self) -> "ZMQRequester":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()
