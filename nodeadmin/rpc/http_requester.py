"""JSON-RPC 2.0 over HTTP requester.

Posts ``{"jsonrpc", "method", "params", "id"}`` to a single endpoint URL
(for the admin API, ``<uri>/ext/admin``) and decodes the ``result`` member
into the caller's reply.
"""
from __future__ import annotations

from typing import Any, Optional

import httpx

from ..core.errors import DecodeError, NodeAdminError, TransportError
from ..telemetry.logging import get_logger
from ..telemetry.metrics import Timer
from .requester import RequestMetrics, build_envelope, handle_response


class HTTPRequester:
    def __init__(
        self,
        url: str,
        namespace: str = "",
        timeout_s: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url
        self.namespace = namespace
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout_s)
        self._metrics = RequestMetrics("http")
        self._log = get_logger("HTTPRequester", {"url": url})

    def send_request(self, method: str, params: Any, reply: Any) -> None:
        envelope = build_envelope(self.namespace, method, params)
        timer = Timer(method)
        ok = False
        try:
            with timer:
                self._send(envelope, reply)
            ok = True
        finally:
            self._metrics.record(method, timer.elapsed, ok)
        self._log.debug(f"{envelope['method']} id={envelope['id']} took {timer.elapsed_ms:.1f}ms")

    def _send(self, envelope: dict, reply: Any) -> None:
        name = envelope["method"]
        try:
            resp = self._client.post(self.url, json=envelope)
        except httpx.TimeoutException as exc:
            self._log.warning(f"{name} timed out")
            raise TransportError(f"timeout calling {name}") from exc
        except httpx.RequestError as exc:
            self._log.warning(f"{name} network error: {exc}")
            raise TransportError(f"network error calling {name}: {exc}") from exc
        except httpx.InvalidURL as exc:
            self._log.warning(f"{name} invalid url {self.url!r}")
            raise TransportError(f"invalid url {self.url!r}: {exc}") from exc

        if resp.status_code >= 400:
            self._log.warning(f"{name} http status {resp.status_code}")
            raise TransportError(
                f"http error {resp.status_code} calling {name}: {resp.text}",
                status_code=resp.status_code,
            )
        try:
            body = resp.json()
        except ValueError as exc:
            self._log.warning(f"{name} non-json body")
            raise DecodeError(f"non-json body calling {name}") from exc
        try:
            handle_response(body, reply)
        except NodeAdminError as exc:
            self._log.warning(f"{name} failed: {exc}")
            raise

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HTTPRequester":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()
