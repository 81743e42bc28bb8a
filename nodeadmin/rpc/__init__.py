"""Requester subpackage.

Provides the requester protocol and its implementations:
- HTTP: JSON-RPC 2.0 over HTTP using httpx
- ZeroMQ: the same envelope over a REQ socket (optional pyzmq)
- Mock: in-memory fixed response for tests
"""

from .requester import EndpointRequester
from .http_requester import HTTPRequester
from .mock import MockRequester

__all__ = [
    "EndpointRequester",
    "HTTPRequester",
    "MockRequester",
]
