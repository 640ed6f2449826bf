"""Command-line interface for the user directory service."""

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import Sequence

try:
    import httpx
except ImportError as exc:  # pragma: no cover - exercised in environments missing deps
    raise SystemExit(
        "The 'httpx' package is required. Install the project with "
        "`pip install -e .` to install dependencies."
    ) from exc

from userdirectory.config import ServiceConfig, load_service_config

logger = logging.getLogger("userdirectory.main")

_DEFAULT_SERVICE_URL = "http://localhost:3000"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User directory service utilities")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP user directory service")
    serve_parser.add_argument("--host", default=None, help="Bind address for the API")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the HTTP API (default: 3000)",
    )
    serve_parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML configuration file (defaults to USER_DIRECTORY_CONFIG)",
    )

    check_parser = subparsers.add_parser(
        "check-config", help="Validate the configuration file and seed users"
    )
    check_parser.add_argument("--config", default=None, help="Path to a YAML configuration file")

    for name, help_text in (
        ("list-users", "List the users held by a running service"),
        ("count-users", "Show how many users a running service holds"),
    ):
        client_parser = subparsers.add_parser(name, help=help_text)
        client_parser.add_argument(
            "--service-url",
            default=None,
            help=f"Base URL of a running user directory service (default: {_DEFAULT_SERVICE_URL})",
        )

    args_list = list(argv) if argv is not None else sys.argv[1:]
    # Bare options such as ``--port 8080`` belong to ``serve``.
    if not args_list or (args_list[0].startswith("-") and args_list[0] not in ("-h", "--help")):
        args_list = ["serve", *args_list]

    return parser.parse_args(args_list)


def _load_config(path: str | None) -> ServiceConfig:
    try:
        return load_service_config(path)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Failed to load configuration: {exc}") from exc


def _serve(config: ServiceConfig, *, host: str | None, port: int | None) -> None:
    from userdirectory.service import create_app
    from userdirectory.validators import ValidationError
    import uvicorn

    bind_host = host or config.host
    bind_port = port or config.port

    try:
        app = create_app(config=config)
    except ValidationError as exc:
        raise SystemExit(f"Invalid seed user in configuration: {exc}") from exc

    logger.info("Starting user directory API on http://%s:%s", bind_host, bind_port)
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=config.log_level)


def _check_config(config: ServiceConfig) -> int:
    from userdirectory.models import NewUser
    from userdirectory.validators import ValidationError

    for index, payload in enumerate(config.seed_users, start=1):
        try:
            NewUser.from_payload(payload)
        except ValidationError as exc:
            print(f"Seed user #{index} is invalid: {exc}")
            return 1

    print(f"Configuration OK: listening on {config.host}:{config.port}")
    print(f"{len(config.seed_users)} seed user(s) configured.")
    return 0


def _fetch(service_url: str | None, path: str) -> object | None:
    endpoint = (service_url or _DEFAULT_SERVICE_URL).rstrip("/") + path

    try:
        response = httpx.get(endpoint, timeout=10.0)
    except httpx.HTTPError as exc:
        print(f"Failed to contact user directory service: {exc}")
        return None

    if response.status_code != 200:
        print(f"Service responded with {response.status_code}: {response.text.strip()}")
        return None

    try:
        return response.json()
    except ValueError:
        print("Service returned an unexpected response format.")
        return None


def _list_users(service_url: str | None) -> int:
    users = _fetch(service_url, "/user")
    if users is None:
        return 1
    if not users:
        print("No users are currently registered.")
        return 0

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':<36}  {'Nick':<32}  {'Born':<10}  Name")
    print("-" * 100)
    for user in users:
        print(f"{user['id']:<36}  {user['nick']:<32}  {user['birth_date']:<10}  {user['name']}")
        if user.get("stack"):
            print(f"{'':<36}  stack: {', '.join(user['stack'])}")
    return 0


def _count_users(service_url: str | None) -> int:
    total = _fetch(service_url, "/count-user")
    if total is None:
        return 1
    print(f"{total} user(s) registered.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    args = _parse_args(argv)

    if args.command == "serve":
        config = _load_config(args.config)
        _serve(config, host=args.host, port=args.port)
        return 0
    if args.command == "check-config":
        return _check_config(_load_config(args.config))
    if args.command == "list-users":
        return _list_users(args.service_url or os.getenv("USER_DIRECTORY_URL"))
    if args.command == "count-users":
        return _count_users(args.service_url or os.getenv("USER_DIRECTORY_URL"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
