#!/usr/bin/env python3
"""Command line runner for quick checks against a qBittorrent Web API."""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from typing import Any, List, Optional

from .client import QbitClient
from .config import QbitConfig
from .exceptions import QbitError
from .utils.logger import get_module_logger
from .utils.loguru_config import setup_loguru

logger = get_module_logger("Cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qbit-client",
        description="Query and update a qBittorrent instance over its Web API.",
    )
    parser.add_argument("--url", help="Web UI base URL (default: $QBIT_URL)")
    parser.add_argument("--user", help="Web API username (default: $QBIT_USER)")
    parser.add_argument("--password", help="Web API password (default: $QBIT_PASS)")
    parser.add_argument("--http-user", help="Reverse proxy Basic-Auth username")
    parser.add_argument("--http-pass", help="Reverse proxy Basic-Auth password")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--env-file", help="Load QBIT_* settings from this .env file")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--json", action="store_true", help="Print raw JSON output")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("transfers", help="List all transfers")
    sub.add_parser("categories", help="List categories")
    set_cat = sub.add_parser("set-category", help="Set the category of one or more torrents")
    set_cat.add_argument("category")
    set_cat.add_argument("hashes", nargs="+", metavar="HASH")
    return parser


def load_config(args: argparse.Namespace) -> QbitConfig:
    config = QbitConfig.from_env(env_file=args.env_file)
    overrides = {
        "url": args.url,
        "user": args.user,
        "password": args.password,
        "http_user": args.http_user,
        "http_pass": args.http_pass,
        "timeout": args.timeout,
    }
    return dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def run(args: argparse.Namespace) -> None:
    config = load_config(args)
    with QbitClient(config) as client:
        if args.command == "transfers":
            transfers = client.get_transfers()
            if args.json:
                _print_json([dataclasses.asdict(t) for t in transfers])
                return
            for transfer in transfers:
                print(f"{transfer.hash}  {transfer.state:<18} {transfer.progress * 100:6.1f}%  {transfer.name}")

        elif args.command == "categories":
            categories = client.get_categories()
            if args.json:
                _print_json({name: dataclasses.asdict(cat) for name, cat in categories.items()})
                return
            for name in sorted(categories):
                print(f"{name}\t{categories[name].save_path}")

        elif args.command == "set-category":
            client.set_torrent_category(args.category, *args.hashes)
            logger.info("Set category %r on %d torrent(s)", args.category, len(args.hashes))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_loguru(args.log_level, args.log_file)

    try:
        run(args)
    except QbitError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
