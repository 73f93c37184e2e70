"""Command-line access to the Nylas API.

Usage:
    nylas-client auth-url https://example.com/callback
    nylas-client exchange <code>
    nylas-client list messages --namespace ns_1 --filter unread=true
    nylas-client get threads thr_1
    nylas-client raw messages msg_1 rfc2822 --output msg.eml
    nylas-client delete drafts dr_1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import sentry_sdk

from nylas_client.client import NylasClient
from nylas_client.config import NylasConfig
from nylas_client.errors import NylasError
from nylas_client.models import get_kind

logger = logging.getLogger(__name__)


def _init_sentry(dsn: str, environment: str) -> None:
    """Initialize Sentry SDK if a DSN is configured and not in development."""
    if not dsn or environment == "development":
        return
    sentry_sdk.init(
        dsn,
        environment=environment,
        traces_sample_rate=0,
        send_client_reports=False,
        auto_session_tracking=False,
    )


def _parse_filters(pairs: list[str]) -> dict[str, str]:
    filters: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Filter must look like key=value, got {pair!r}")
        filters[key] = value
    return filters


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nylas-client", description="Talk to the Nylas API")
    parser.add_argument("--config", type=Path, help="YAML config file (default: config/nylas.yml)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("auth-url", help="Print the OAuth authorization URL")
    p.add_argument("redirect_uri")
    p.add_argument("--login-hint")

    p = sub.add_parser("exchange", help="Exchange an authorization code for an access token")
    p.add_argument("code")

    for name, help_text in (("list", "List a collection"), ("get", "Fetch one resource")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("kind")
        if name == "get":
            p.add_argument("id")
        p.add_argument("--namespace")
        p.add_argument("--filter", action="append", default=[], metavar="KEY=VALUE")

    p = sub.add_parser("raw", help="Download an undecoded sub-resource")
    p.add_argument("kind")
    p.add_argument("id")
    p.add_argument("extra", help="Trailing path segment, e.g. rfc2822 or download")
    p.add_argument("--namespace")
    p.add_argument("--output", type=Path, help="Write to file instead of stdout")

    p = sub.add_parser("delete", help="Delete one resource")
    p.add_argument("kind")
    p.add_argument("id")
    p.add_argument("--namespace")

    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def run(args: argparse.Namespace, client: NylasClient) -> int:
    if args.command == "auth-url":
        print(client.authorization_url(args.redirect_uri, args.login_hint))
    elif args.command == "exchange":
        token = client.exchange_code(args.code)
        if not token:
            print("No access token returned", file=sys.stderr)
            return 1
        print(token)
    elif args.command == "list":
        resources = client.list(get_kind(args.kind), args.namespace, _parse_filters(args.filter))
        _print_json([r.to_dict() for r in resources])
    elif args.command == "get":
        resource = client.get(
            get_kind(args.kind), args.id, args.namespace, _parse_filters(args.filter)
        )
        _print_json(resource.to_dict())
    elif args.command == "raw":
        data = client.get_raw(get_kind(args.kind), args.id, args.namespace, {"extra": args.extra})
        if args.output:
            args.output.write_bytes(data)
            print(f"Wrote {len(data)} bytes to {args.output}")
        else:
            sys.stdout.buffer.write(data)
    elif args.command == "delete":
        _print_json(client.delete(get_kind(args.kind), args.id, args.namespace))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = NylasConfig.from_yaml(args.config)
    _init_sentry(config.sentry_dsn, config.environment)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        with NylasClient.from_config(config) as client:
            return run(args, client)
    except (NylasError, argparse.ArgumentTypeError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
