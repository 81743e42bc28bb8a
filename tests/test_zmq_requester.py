from __future__ import annotations

import logging
import threading

import pytest

zmq = pytest.importorskip("zmq")

from nodeadmin.admin.client import AdminClient  # noqa: E402
from nodeadmin.core.errors import RemoteError, TransportError  # noqa: E402
from nodeadmin.core.schemas import EmptyArgs, SuccessResponse  # noqa: E402
from nodeadmin.rpc.zmq_requester import ZMQRequester  # noqa: E402


def _serve(ctx, endpoint: str, replies: list[dict], seen: list[dict]) -> threading.Thread:  # noqa: ANN001
    rep = ctx.socket(zmq.REP)
    rep.bind(endpoint)

    def loop() -> None:
        try:
            for reply in replies:
                msg = rep.recv_json()
                seen.append(msg)
                rep.send_json(dict(reply, id=msg.get("id")))
        finally:
            rep.close(linger=0)

    t = threading.Thread(target=loop, daemon=True)
    t.start()
    return t


def test_roundtrip_over_inproc():
    ctx = zmq.Context()
    seen: list[dict] = []
    t = _serve(
        ctx,
        "inproc://admin-roundtrip",
        [
            {"jsonrpc": "2.0", "result": {"success": True}},
            {"jsonrpc": "2.0", "result": {"aliases": ["x", "y"]}},
            {"jsonrpc": "2.0", "error": {"code": -32601, "message": "method not found"}},
        ],
        seen,
    )
    with ZMQRequester("inproc://admin-roundtrip", namespace="admin", timeout_s=5.0, context=ctx) as requester:
        client = AdminClient(requester)
        assert client.stacktrace() is True
        assert client.get_aliases_of_chain("chain").aliases == ["x", "y"]
        with pytest.raises(RemoteError):
            client.lock_profile()
    t.join(timeout=5.0)
    ctx.term()

    assert [m["method"] for m in seen] == ["admin.stacktrace", "admin.getChainAliases", "admin.lockProfile"]
    assert seen[1]["params"] == {"chain": "chain"}


def test_timeout_is_transport_error_and_socket_recovers():
    ctx = zmq.Context()
    # Nothing is bound, so no request ever gets an answer.
    requester = ZMQRequester("inproc://admin-nobody", timeout_s=0.2, context=ctx)
    with pytest.raises(TransportError, match="timeout"):
        requester.send_request("stacktrace", EmptyArgs(), SuccessResponse())
    # A stuck REQ socket would fail with a state error instead of timing out again.
    with pytest.raises(TransportError, match="timeout"):
        requester.send_request("stacktrace", EmptyArgs(), SuccessResponse())
    requester.close()
    ctx.term()


def test_bad_endpoint_is_transport_error():
    with pytest.raises(TransportError, match="cannot connect"):
        ZMQRequester("nonsense", timeout_s=0.2)


class _BrokenSocket:
    def __init__(self) -> None:
        self.closed = False

    def send_json(self, obj):  # noqa: ANN001, ANN201
        raise zmq.ZMQError(zmq.EFSM)

    def close(self, linger=None) -> None:  # noqa: ANN001
        self.closed = True


def test_zmq_error_rebuilds_socket(caplog):
    ctx = zmq.Context()
    requester = ZMQRequester("inproc://admin-broken", timeout_s=0.2, context=ctx)
    requester._sock.close(linger=0)
    broken = _BrokenSocket()
    requester._sock = broken

    with caplog.at_level(logging.WARNING, logger="nodeadmin"):
        with pytest.raises(TransportError, match="zmq error"):
            requester.send_request("stacktrace", EmptyArgs(), SuccessResponse())

    assert broken.closed
    assert requester._sock is not broken
    assert any("zmq error" in r.getMessage() for r in caplog.records)
    requester.close()
    ctx.term()


def test_remote_error_is_logged(caplog):
    ctx = zmq.Context()
    seen: list[dict] = []
    t = _serve(ctx, "inproc://admin-remote", [{"jsonrpc": "2.0", "error": {"code": -32000, "message": "busy"}}], seen)
    with ZMQRequester("inproc://admin-remote", namespace="admin", timeout_s=5.0, context=ctx) as requester:
        with caplog.at_level(logging.WARNING, logger="nodeadmin"):
            with pytest.raises(RemoteError):
                requester.send_request("lockProfile", EmptyArgs(), SuccessResponse())
    t.join(timeout=5.0)
    ctx.term()
    assert any("busy" in r.getMessage() for r in caplog.records)
