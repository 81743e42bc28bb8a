"""In-process stand-in for a node's admin API, for transport tests."""
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import FastAPI, Request


def build_fake_node(aliases: Dict[str, List[str]] | None = None) -> FastAPI:
    app = FastAPI(title="fake node")
    state: Dict[str, Any] = {
        "profiling": False,
        "aliases": {k: list(v) for k, v in (aliases or {}).items()},
        "endpoint_aliases": {},
        "seen": [],
    }
    app.state.node = state

    def _ok(req_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
        return {"jsonrpc": "2.0", "result": result, "id": req_id}

    def _err(req_id: Any, code: int, message: str) -> Dict[str, Any]:
        return {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": req_id}

    @app.post("/ext/admin")
    async def admin(request: Request) -> Dict[str, Any]:
        msg = await request.json()
        state["seen"].append(msg)
        method = msg.get("method", "")
        params = msg.get("params") or {}
        req_id = msg.get("id")

        if method == "admin.startCPUProfiler":
            if state["profiling"]:
                return _err(req_id, -32000, "cpu profiler already running")
            state["profiling"] = True
            return _ok(req_id, {"success": True})
        if method == "admin.stopCPUProfiler":
            if not state["profiling"]:
                return _err(req_id, -32000, "cpu profiler not running")
            state["profiling"] = False
            return _ok(req_id, {"success": True})
        if method in ("admin.memoryProfile", "admin.lockProfile", "admin.stacktrace"):
            return _ok(req_id, {"success": True})
        if method == "admin.alias":
            state["endpoint_aliases"][params["alias"]] = params["endpoint"]
            return _ok(req_id, {"success": True})
        if method == "admin.aliasChain":
            chain = params["chain"]
            if chain not in state["aliases"]:
                return _ok(req_id, {"success": False})
            state["aliases"][chain].append(params["alias"])
            return _ok(req_id, {"success": True})
        if method == "admin.getChainAliases":
            return _ok(req_id, {"aliases": state["aliases"].get(params["chain"], [])})
        return _err(req_id, -32601, f"method not found: {method}")

    return app
