# =============================================================================
# src/cli/__init__.py: CLI Module Overview
# =============================================================================
#
# Operator tooling for inspecting and invalidating the token cache outside
# of the application that owns it.  Each command builds its own TokenCache
# from Settings (optionally overridden by --config / --db-path), runs once
# and exits.
#
# All commands use argparse for argument parsing (not Click/Typer) to keep
# the dependency set small.
# =============================================================================

"""CLI tools for the token cache.

- ``python -m src.cli partitions``: list partitions in the index
- ``python -m src.cli show <partition>``: print the usable token as JSON
- ``python -m src.cli clear``: drop every token except the read-only one
"""
