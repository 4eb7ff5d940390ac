from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration resolution
(defaults, persisted file, command-line overrides), logging bootstrap,
service execution and result rendering.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from arborize.core.service import generate_directory_tree, generate_divisor_tree
from arborize.core.validator import validate_config
from arborize.domain.build_models import BuildResult
from arborize.domain.config import get_default_config, load_config, save_config
from arborize.infra.fs import normalize_path
from arborize.infra.logging import LoggingConfig, configure_logging, get_logger
from arborize.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_BUILD_FAILED = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")

    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig(
        level=clean_conf["log_level"],
        console=True,
        log_file=clean_conf["log_file"],
    ))
    for w in warnings:
        logger.warning(f"Configuration: {w}")

    if args.save_config and not save_config(clean_conf):
        print("WARNING: Could not persist the configuration.", file=sys.stderr)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not args.command:
        if args.save_config:
            return EXIT_OK
        parser.print_help(sys.stderr)
        return EXIT_BAD_INPUT

    # 4. Service execution
    try:
        result = _dispatch(args, clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if result is None:
        return EXIT_BAD_INPUT

    # 5. Output rendering
    _print_result(result)
    return EXIT_OK if result.ok else EXIT_BUILD_FAILED


def _dispatch(args: Any, config: Dict[str, Any]) -> Optional[BuildResult]:
    """Route the parsed subcommand to its service. None means bad input."""
    save_path = args.save_path or ""

    if args.command == "tree":
        input_path = normalize_path(config["input_path"], fallback=os.getcwd())
        config = {**config, "input_path": input_path}
        if not os.path.exists(input_path):
            msg = f"Input path does not exist: {input_path}"
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return None
        return generate_directory_tree(config, save_path=save_path)

    if args.number < 1:
        print(f"ERROR: Expected a positive integer, received {args.number}.", file=sys.stderr)
        return None
    return generate_divisor_tree(args.number, config, save_path=save_path)

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    ``None`` overrides are skipped so unset flags keep the base value.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_result(result: BuildResult) -> None:
    """Print the rendered tree to stdout, or the failure to stderr."""
    if not result.ok:
        kind = f"{result.error_type}: " if result.error_type and result.error != result.error_type else ""
        print(f"ERROR: {kind}{result.error}", file=sys.stderr)
        return

    for line in result.lines:
        print(line)

    if result.output_path:
        print(f"Saved to: {result.output_path}", file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
