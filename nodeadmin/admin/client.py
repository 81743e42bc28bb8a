"""Client for a node's admin API.

Every method builds its params, hands a fresh reply to the requester and
returns what the reply carries. Requester exceptions propagate unchanged.
"""
from __future__ import annotations

from ..config import DEFAULT_TIMEOUT_S, ClientConfig
from ..core.schemas import (
    AliasArgs,
    AliasChainArgs,
    EmptyArgs,
    GetAliasesOfChainReply,
    GetChainAliasesArgs,
    SuccessResponse,
)
from ..rpc.http_requester import HTTPRequester
from ..rpc.requester import EndpointRequester


class AdminClient:
    def __init__(self, requester: EndpointRequester) -> None:
        self.requester = requester

    @classmethod
    def from_uri(cls, uri: str, timeout_s: float = DEFAULT_TIMEOUT_S) -> "AdminClient":
        cfg = ClientConfig(uri=uri, timeout_s=timeout_s)
        return cls(HTTPRequester(cfg.endpoint, namespace=cfg.namespace, timeout_s=cfg.timeout_s))

    def _success(self, method: str, params: object) -> bool:
        reply = SuccessResponse()
        self.requester.send_request(method, params, reply)
        return reply.success

    def start_cpu_profiler(self) -> bool:
        return self._success("startCPUProfiler", EmptyArgs())

    def stop_cpu_profiler(self) -> bool:
        return self._success("stopCPUProfiler", EmptyArgs())

    def memory_profile(self) -> bool:
        return self._success("memoryProfile", EmptyArgs())

    def lock_profile(self) -> bool:
        return self._success("lockProfile", EmptyArgs())

    def alias(self, endpoint: str, alias: str) -> bool:
        """Give the API ``endpoint`` an additional ``alias``."""
        return self._success("alias", AliasArgs(endpoint=endpoint, alias=alias))

    def alias_chain(self, chain: str, alias: str) -> bool:
        return self._success("aliasChain", AliasChainArgs(chain=chain, alias=alias))

    def get_aliases_of_chain(self, chain: str) -> GetAliasesOfChainReply:
        reply = GetAliasesOfChainReply()
        self.requester.send_request("getChainAliases", GetChainAliasesArgs(chain=chain), reply)
        return reply

    def stacktrace(self) -> bool:
        return self._success("stacktrace", EmptyArgs())
