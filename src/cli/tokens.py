"""CLI for inspecting and clearing the token cache.

Usage::

    # List partitions currently in the index
    python -m src.cli partitions

    # Print the usable token for one partition (exit 1 if none)
    python -m src.cli show user-1234

    # Remove every cached token except the read-only partition's
    python -m src.cli clear

    # Point at a different database file
    python -m src.cli --db-path /tmp/tokens.db partitions
"""

from __future__ import annotations

import argparse
import sys

from src.config.loader import load_settings
from src.services.token_cache import TokenCache
from src.utils.logging import configure_logging_from_settings

# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def _handle_partitions(cache: TokenCache, args: argparse.Namespace) -> int:
    """Print indexed partition names, one per line."""
    names = sorted(cache.cached_partition_names())
    if not names:
        print("No cached partitions.")
        return 0
    for name in names:
        print(name)
    return 0


def _handle_show(cache: TokenCache, args: argparse.Namespace) -> int:
    """Print the usable token for a partition as JSON."""
    token = cache.get_cached_token(args.partition)
    if token is None:
        print(f"No usable token for partition '{args.partition}'.", file=sys.stderr)
        return 1
    print(token.model_dump_json(by_alias=True, indent=2))
    return 0


def _handle_clear(cache: TokenCache, args: argparse.Namespace) -> int:
    """Remove all cached tokens except the read-only partition's."""
    cache.remove_all_cached_tokens()
    print(f"Removed all cached tokens (kept '{cache.readonly_partition}').")
    return 0


_HANDLERS = {
    "partitions": _handle_partitions,
    "show": _handle_show,
    "clear": _handle_clear,
}


# ---------------------------------------------------------------------------
# Parser and entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="token-cache",
        description="Inspect and clear the persistent partition token cache.",
    )
    parser.add_argument(
        "--config",
        default="config/token_cache.yaml",
        help="YAML settings file (default: config/token_cache.yaml)",
    )
    parser.add_argument(
        "--db-path",
        default=None,
        help="SQLite database path, overriding configuration",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("partitions", help="List partitions in the index")
    show = subparsers.add_parser("show", help="Print the usable token for a partition")
    show.add_argument("partition", help="Partition name")
    subparsers.add_parser("clear", help="Remove all tokens except the read-only one")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv* and run the selected command.  Returns the exit code."""
    # Deferred: importing src.main loads the default settings file.
    from src.main import build_token_cache

    args = build_parser().parse_args(argv)

    app_settings = load_settings(args.config)
    if args.db_path:
        app_settings = app_settings.model_copy(
            update={"token_store_backend": "sqlite", "token_store_db_path": args.db_path}
        )

    # Logs go to stderr; stdout carries only command output.
    configure_logging_from_settings(app_settings, stream=sys.stderr)

    cache = build_token_cache(app_settings)
    return _HANDLERS[args.command](cache, args)
