"""Command-line interface for the Acme admin API."""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import httpx

from acme_admin.config import Settings, load_settings

logger = logging.getLogger("acme_admin.main")

_DEFAULT_SERVICE_URL = "http://localhost:3000"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Acme admin API utilities")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP admin API")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: from settings)")
    serve_parser.add_argument("--port", type=int, default=None, help="Listen port (default: from settings)")
    serve_parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML settings file (default: ACME_ADMIN_CONFIG when set)",
    )

    status_parser = subparsers.add_parser(
        "status", help="Query a running service for its health and summary statistics"
    )
    status_parser.add_argument(
        "--service-url",
        default=_DEFAULT_SERVICE_URL,
        help=f"Base URL of a running admin API (default: {_DEFAULT_SERVICE_URL})",
    )

    args_list = list(sys.argv[1:] if argv is None else argv)
    wants_help = bool({"-h", "--help"} & set(args_list))
    # A bare option list (or nothing at all) means "serve"; help stays top-level.
    if not args_list or (args_list[0] not in subparsers.choices and not wants_help):
        args_list.insert(0, "serve")
    return parser.parse_args(args_list)


def _load_settings(config: str | None) -> Settings:
    config_path = Path(config).expanduser().resolve(strict=False) if config else None
    return load_settings(config_path)


def _serve(settings: Settings, *, host: str | None, port: int | None) -> None:
    from acme_admin.api import build_store, create_app
    import uvicorn

    bind_host = host or settings.host
    bind_port = port if port is not None else settings.port

    store = build_store(settings)
    counts = store.counts()
    logger.info(
        "Store ready with %d user(s) and %d team(s) (%s)",
        counts["users"],
        counts["teams"],
        settings.environment,
    )
    logger.info("Starting admin API on http://%s:%s", bind_host, bind_port)

    app = create_app(store=store, settings=settings)
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=settings.log_level.lower())


def _show_status(service_url: str) -> int:
    base_url = service_url.rstrip("/")

    try:
        health = httpx.get(f"{base_url}/health", timeout=10.0)
    except httpx.HTTPError as exc:
        print(f"Failed to contact admin API: {exc}")
        return 1

    if health.status_code != 200:
        print(f"Health check failed with {health.status_code}: {health.text.strip()}")
        return 1

    print(f"Service at {base_url} is healthy.")

    try:
        response = httpx.get(f"{base_url}/api/stats", timeout=10.0)
    except httpx.HTTPError as exc:
        print(f"Failed to fetch statistics: {exc}")
        return 1

    if response.status_code != 200:
        print(f"Service responded with {response.status_code}: {response.text.strip()}")
        return 1

    try:
        payload = response.json()
    except ValueError:
        print("Service returned an unexpected response format.")
        return 1

    users = payload.get("users", {})
    teams = payload.get("teams", {})
    print(
        f"Users: {users.get('total', 0)} total, {users.get('active', 0)} active, "
        f"{users.get('inactive', 0)} inactive, {users.get('pending', 0)} pending"
    )
    for role, count in sorted(users.get("byRole", {}).items()):
        print(f"  {role:<16} {count:>4}")
    print(f"Teams: {teams.get('total', 0)} total, {teams.get('totalMemberships', 0)} memberships")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    args = _parse_args(argv)

    if args.command == "status":
        logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
        return _show_status(args.service_url)

    settings = _load_settings(args.config)
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.DEBUG),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    _serve(settings, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
