"""Configuration for the admin client.

Values come from the environment and can be overridden by CLI flags.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from .utils.env import env_float, env_str

DEFAULT_URI = "http://127.0.0.1:9650"
DEFAULT_TIMEOUT_S = 10.0


@dataclass(slots=True)
class ClientConfig:
    uri: str = DEFAULT_URI
    timeout_s: float = DEFAULT_TIMEOUT_S
    namespace: str = "admin"
    endpoint_path: str = "/ext/admin"
    zmq_endpoint: str | None = None

    @property
    def endpoint(self) -> str:
        return self.uri.rstrip("/") + self.endpoint_path

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            uri=env_str("NODEADMIN_URI", DEFAULT_URI),
            timeout_s=env_float("NODEADMIN_TIMEOUT", DEFAULT_TIMEOUT_S, minimum=0.1),
            zmq_endpoint=os.getenv("NODEADMIN_ZMQ_ENDPOINT") or None,
        )
