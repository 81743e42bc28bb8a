"""Common exceptions for the nodeadmin client."""
from __future__ import annotations

from typing import Any, Optional


class NodeAdminError(Exception):
    pass


class TransportError(NodeAdminError):
    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(NodeAdminError):
    pass


class RemoteError(NodeAdminError):
    """The node answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Optional[Any] = None) -> None:
        super().__init__(f"{message} (code {code})")
        self.code = code
        self.message = message
        self.data = data
