import argparse
import os
import sys

import httpx


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user in a running user directory service")
    parser.add_argument("name", help="Display name for the user")
    parser.add_argument("nick", help="Short handle for the user")
    parser.add_argument("birth_date", help="Birth date formatted as YYYY-MM-DD")
    parser.add_argument(
        "--stack",
        action="append",
        default=None,
        help="Technology tag; repeat the option to add several",
    )
    parser.add_argument(
        "--service-url",
        default=None,
        help="Base URL of the service (defaults to USER_DIRECTORY_URL or http://localhost:3000)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    base_url = args.service_url or os.getenv("USER_DIRECTORY_URL") or "http://localhost:3000"
    payload = {
        "name": args.name.strip(),
        "nick": args.nick.strip(),
        "birth_date": args.birth_date.strip(),
    }
    if args.stack is not None:
        payload["stack"] = [entry.strip() for entry in args.stack]

    try:
        response = httpx.post(base_url.rstrip("/") + "/user", json=payload, timeout=10.0)
    except httpx.HTTPError as exc:
        print(f"Error: failed to contact service: {exc}", file=sys.stderr)
        return 1

    if response.status_code != 201:
        print(f"Error: service responded with {response.status_code}: {response.text.strip()}", file=sys.stderr)
        return 1

    user = response.json()
    print(f"Created user {user['id']}: {user['name']} ({user['nick']})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
