"""In-memory requester for unit tests.

Configured once with a response and/or an error; never touches the
network.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..core.schemas import GetAliasesOfChainReply, SuccessResponse


class MockRequester:
    def __init__(self, response: Any = None, error: Optional[BaseException] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Tuple[str, Any]] = []

    def send_request(self, method: str, params: Any, reply: Any) -> None:
        self.calls.append((method, params))
        # A configured error models a transport failure regardless of the call.
        if self.error is not None:
            raise self.error

        if isinstance(reply, SuccessResponse):
            if not isinstance(self.response, SuccessResponse):
                raise AssertionError(
                    f"{method}: SuccessResponse reply but mock holds {type(self.response).__name__}"
                )
            reply.success = self.response.success
        elif isinstance(reply, GetAliasesOfChainReply):
            if not isinstance(self.response, GetAliasesOfChainReply):
                raise AssertionError(
                    f"{method}: GetAliasesOfChainReply reply but mock holds {type(self.response).__name__}"
                )
            reply.aliases = list(self.response.aliases)
        else:
            raise AssertionError(f"{method}: illegal reply type {type(reply).__name__}")
