from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global options plus the 'tree' and
'divisors' subcommands) and translates parsed namespaces into configuration
overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the arborize CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="arborize",
        description="Build and render trees by recursive expansion.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-config",
        dest="save_config",
        action="store_true",
        help="Persist the effective configuration for later runs.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    sub = p.add_subparsers(dest="command")

    # --- Directory tree ---
    tree = sub.add_parser("tree", help="Render a directory tree.")
    tree.add_argument(
        "input_path",
        nargs="?",
        default=None,
        help="Directory to scan (default: current directory).",
    )
    tree.add_argument("--hidden", action="store_true", help="Include dot-files.")
    tree.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Expand symlinked directories (cycles are not detected).",
    )
    tree.add_argument("--dirs-first", action="store_true", help="List directories before files.")
    tree.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help="Do not expand entries deeper than this.",
    )
    tree.add_argument(
        "--timeout",
        dest="timeout_seconds",
        type=float,
        default=None,
        help="Per-directory listing timeout in seconds (effectful mode only).",
    )
    _add_common_output_args(tree)

    # --- Divisor sample ---
    divisors = sub.add_parser("divisors", help="Render the proper-divisor tree of N.")
    divisors.add_argument("number", type=int, help="Root of the divisor tree.")
    _add_common_output_args(divisors)

    return p


def _add_common_output_args(p: argparse.ArgumentParser) -> None:
    """Register the strategy and output options shared by every subcommand."""
    p.add_argument(
        "--async",
        dest="effectful",
        action="store_true",
        help="Use the effectful (asyncio) builder.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Render the tree as JSON.",
    )
    p.add_argument(
        "--save",
        dest="save_path",
        default=None,
        help="Also write the rendered tree to this file.",
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags that were not given map to ``None`` or are omitted, so they never
    override persisted values.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["input_path"] = getattr(args, "input_path", None)
    overrides["max_depth"] = getattr(args, "max_depth", None)
    overrides["timeout_seconds"] = getattr(args, "timeout_seconds", None)
    overrides["log_file"] = args.log_file

    if getattr(args, "hidden", False):
        overrides["show_hidden"] = True
    if getattr(args, "follow_symlinks", False):
        overrides["follow_symlinks"] = True
    if getattr(args, "dirs_first", False):
        overrides["dirs_first"] = True
    if getattr(args, "effectful", False):
        overrides["effectful"] = True
    if getattr(args, "json_output", False):
        overrides["output_format"] = "json"
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
