"""Requester interface and the JSON-RPC helpers shared by transports.

A requester turns a method name and params into a populated reply. The
caller allocates the reply; on success the requester overwrites its
fields in place, on failure it raises and the reply must not be read.
"""
from __future__ import annotations

import itertools
import json
from typing import Any, Dict, Protocol

from pydantic import BaseModel, ValidationError

from ..core.errors import DecodeError, RemoteError
from ..telemetry.prom import Counter, Histogram

JSONRPC_VERSION = "2.0"

_ids = itertools.count(1)


class EndpointRequester(Protocol):
    """Protocol for anything that can send a named call and fill a reply."""

    def send_request(self, method: str, params: Any, reply: Any) -> None:
        ...


def qualify(namespace: str, method: str) -> str:
    if not namespace:
        return method
    return f"{namespace}.{method}"


def encode_params(params: Any) -> Dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, BaseModel):
        return params.model_dump(by_alias=True)
    if isinstance(params, dict):
        return dict(params)
    raise TypeError(f"unsupported params type {type(params).__name__}")


def build_envelope(namespace: str, method: str, params: Any) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "method": qualify(namespace, method),
        "params": encode_params(params),
        "id": next(_ids),
    }


def populate_reply(reply: BaseModel, result: Any) -> None:
    """Validate ``result`` against the reply's model and copy it into ``reply``."""
    try:
        decoded = type(reply).model_validate(result)
    except ValidationError as exc:
        raise DecodeError(f"result does not match {type(reply).__name__}: {exc}") from exc
    for name in type(reply).model_fields:
        setattr(reply, name, getattr(decoded, name))


def handle_response(body: Any, reply: BaseModel) -> None:
    """Interpret a decoded JSON-RPC response object for ``reply``.

    Raises RemoteError when the node returned an error member and
    DecodeError when the body is not a usable response.
    """
    if isinstance(body, (bytes, str)):
        try:
            body = json.loads(body)
        except ValueError as exc:
            raise DecodeError(f"response is not valid JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise DecodeError(f"response must be a JSON object, got {type(body).__name__}")
    err = body.get("error")
    if err is not None:
        if not isinstance(err, dict):
            raise DecodeError(f"malformed error member: {err!r}")
        code = err.get("code", 0)
        if not isinstance(code, int):
            raise DecodeError(f"malformed error code: {code!r}")
        raise RemoteError(code, str(err.get("message", "")), err.get("data"))
    if "result" not in body:
        raise DecodeError("response carries neither result nor error")
    populate_reply(reply, body["result"])


class RequestMetrics:
    """Per-method request, failure and latency metrics for a transport."""

    def __init__(self, transport: str) -> None:
        self.transport = transport
        self.requests = Counter(
            "nodeadmin_rpc_requests_total", "Admin RPC requests sent", ["transport", "method"]
        )
        self.errors = Counter(
            "nodeadmin_rpc_errors_total", "Admin RPC requests that failed", ["transport", "method"]
        )
        self.latency = Histogram(
            "nodeadmin_rpc_latency_seconds", "Admin RPC round-trip latency", ["transport", "method"]
        )

    def record(self, method: str, elapsed: float, ok: bool) -> None:
        self.requests.inc(transport=self.transport, method=method)
        self.latency.observe(elapsed, transport=self.transport, method=method)
        if not ok:
            self.errors.inc(transport=self.transport, method=method)
