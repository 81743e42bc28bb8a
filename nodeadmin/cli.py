"""nodeadmin CLI."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable

from .admin.client import AdminClient
from .config import ClientConfig
from .core.errors import NodeAdminError
from .rpc.http_requester import HTTPRequester
from .telemetry.logging import get_logger

# Exit codes: 0 ok, 1 request failed, 2 node reported success=false.
EXIT_FAILED = 1
EXIT_UNSUCCESSFUL = 2

log = get_logger("nodeadmin.cli")


def _config_from_args(args: argparse.Namespace) -> ClientConfig:
    cfg = ClientConfig.from_env()
    if args.uri:
        cfg.uri = args.uri
    if args.timeout is not None:
        cfg.timeout_s = max(0.1, args.timeout)
    if args.zmq:
        cfg.zmq_endpoint = args.zmq
    return cfg


def _make_requester(cfg: ClientConfig):  # noqa: ANN202
    if cfg.zmq_endpoint:
        from .rpc.zmq_requester import ZMQRequester

        return ZMQRequester(cfg.zmq_endpoint, namespace=cfg.namespace, timeout_s=cfg.timeout_s)
    return HTTPRequester(cfg.endpoint, namespace=cfg.namespace, timeout_s=cfg.timeout_s)


def _run(args: argparse.Namespace, call: Callable[[AdminClient], Any]) -> int:
    cfg = _config_from_args(args)
    requester = None
    try:
        requester = _make_requester(cfg)
        result = call(AdminClient(requester))
    except (NodeAdminError, RuntimeError) as e:
        # RuntimeError: the selected transport is not installed.
        log.debug(f"{args.cmd} failed against {cfg.zmq_endpoint or cfg.endpoint}")
        print(f"{args.cmd} failed: {e}", file=sys.stderr)
        return EXIT_FAILED
    finally:
        if requester is not None:
            requester.close()

    if isinstance(result, bool):
        print(json.dumps({"success": result}))
        return 0 if result else EXIT_UNSUCCESSFUL
    print(json.dumps(result.model_dump()))
    return 0


def _cmd_start_cpu_profiler(a: argparse.Namespace) -> int:
    return _run(a, lambda c: c.start_cpu_profiler())


def _cmd_stop_cpu_profiler(a: argparse.Namespace) -> int:
    return _run(a, lambda c: c.stop_cpu_profiler())


def _cmd_memory_profile(a: argparse.Namespace) -> int:
    return _run(a, lambda c: c.memory_profile())


def _cmd_lock_profile(a: argparse.Namespace) -> int:
    return _run(a, lambda c: c.lock_profile())


def _cmd_stacktrace(a: argparse.Namespace) -> int:
    return _run(a, lambda c: c.stacktrace())


def _cmd_alias(a: argparse.Namespace) -> int:
    return _run(a, lambda c: c.alias(a.endpoint, a.alias))


def _cmd_alias_chain(a: argparse.Namespace) -> int:
    return _run(a, lambda c: c.alias_chain(a.chain, a.alias))


def _cmd_chain_aliases(a: argparse.Namespace) -> int:
    return _run(a, lambda c: c.get_aliases_of_chain(a.chain))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nodeadmin")
    p.add_argument("--uri", default=None, help="Node base URI or NODEADMIN_URI env (default http://127.0.0.1:9650)")
    p.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds or NODEADMIN_TIMEOUT env")
    p.add_argument("--zmq", default=None, help="ZeroMQ endpoint instead of HTTP (requires pyzmq)")
    sub = p.add_subparsers(dest="cmd", required=True)

    # profiling
    sp = sub.add_parser("start-cpu-profiler", help="Start a CPU profile on the node")
    sp.set_defaults(func=_cmd_start_cpu_profiler)

    sp = sub.add_parser("stop-cpu-profiler", help="Stop the running CPU profile")
    sp.set_defaults(func=_cmd_stop_cpu_profiler)

    sp = sub.add_parser("memory-profile", help="Dump a memory profile")
    sp.set_defaults(func=_cmd_memory_profile)

    sp = sub.add_parser("lock-profile", help="Dump a mutex profile")
    sp.set_defaults(func=_cmd_lock_profile)

    sp = sub.add_parser("stacktrace", help="Dump the stacktrace of the node process")
    sp.set_defaults(func=_cmd_stacktrace)

    # aliasing
    sp = sub.add_parser("alias", help="Assign an alias to an API endpoint")
    sp.add_argument("endpoint", help="API endpoint, e.g. ext/bc/X")
    sp.add_argument("alias", help="New alias for the endpoint")
    sp.set_defaults(func=_cmd_alias)

    sp = sub.add_parser("alias-chain", help="Assign an alias to a chain")
    sp.add_argument("chain", help="Chain ID")
    sp.add_argument("alias", help="New alias for the chain")
    sp.set_defaults(func=_cmd_alias_chain)

    sp = sub.add_parser("chain-aliases", help="List the aliases of a chain")
    sp.add_argument("chain", help="Chain ID")
    sp.set_defaults(func=_cmd_chain_aliases)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
