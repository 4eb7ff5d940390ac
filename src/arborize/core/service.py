from __future__ import annotations

"""
Tree Building Services.

Orchestrates the collaborators around the generic builder: chooses the
expansion functions from configuration, runs the pure or effectful build,
renders the result and optionally persists it. This is the caller-side
error boundary: failures from the builder are logged and turned into error
results here, never inside the builder.
"""

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Callable, Dict, List

from arborize.core.builder import build, build_async
from arborize.core.divisors import divisor_children
from arborize.core.effects import lift
from arborize.core.renderer import (
    count_nodes,
    render_ascii,
    render_json,
    tree_combine,
    tree_depth,
)
from arborize.domain.build_models import (
    BuildResult,
    create_error_result,
    create_success_result,
)
from arborize.domain.tree_models import FsEntry, Tree
from arborize.infra.fs import (
    make_fs_expand,
    make_fs_expand_async,
    root_entry,
    safe_mkdir,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def generate_directory_tree(config: Dict[str, Any], *, save_path: str = "") -> BuildResult:
    """
    Build and render the directory tree described by ``config``.

    Args:
        config: Validated configuration (see validate_config).
        save_path: Optional file to persist the rendered output to.

    Returns:
        BuildResult: Rendered lines and statistics, or the first failure.
    """
    input_path = config["input_path"]
    logger.info(f"Generating directory tree for: {input_path}")

    def _build() -> Tree:
        root = root_entry(input_path)
        if config.get("effectful"):
            expand_async = make_fs_expand_async(
                show_hidden=config["show_hidden"],
                follow_symlinks=config["follow_symlinks"],
                dirs_first=config["dirs_first"],
                max_depth=config["max_depth"],
                timeout_seconds=config["timeout_seconds"],
            )
            return run_effectful(build_async(expand_async, lift(tree_combine(_entry_label)), root))

        expand = make_fs_expand(
            show_hidden=config["show_hidden"],
            follow_symlinks=config["follow_symlinks"],
            dirs_first=config["dirs_first"],
            max_depth=config["max_depth"],
        )
        return build(expand, tree_combine(_entry_label), root)

    return run_build(_build, source=input_path, config=config, save_path=save_path)


def generate_divisor_tree(n: int, config: Dict[str, Any], *, save_path: str = "") -> BuildResult:
    """Build and render the proper-divisor tree rooted at ``n``."""
    logger.info(f"Generating divisor tree for: {n}")

    def _build() -> Tree:
        if config.get("effectful"):
            return run_effectful(build_async(lift(divisor_children), lift(tree_combine()), n))
        return build(divisor_children, tree_combine(), n)

    return run_build(_build, source=str(n), config=config, save_path=save_path)


def run_effectful(awaitable: Awaitable[Tree]) -> Tree:
    """
    Drive an effectful build to completion on a private event loop.

    Blocking listings run on a dedicated worker pool installed as the loop's
    default executor. The pool is released without joining its threads, so
    a listing abandoned by its timeout does not keep the caller waiting
    after the build has failed.

    Args:
        awaitable: The build coroutine (usually from build_async).

    Returns:
        Tree: The built tree.
    """
    loop = asyncio.new_event_loop()
    executor = ThreadPoolExecutor(thread_name_prefix="ListingWorker")
    loop.set_default_executor(executor)
    try:
        return loop.run_until_complete(awaitable)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
        loop.close()


def run_build(
        build_fn: Callable[[], Tree],
        *,
        source: str,
        config: Dict[str, Any],
        save_path: str = "",
) -> BuildResult:
    """
    Run a tree build and convert its outcome into a BuildResult.

    Exceptions raised by ``build_fn`` (expansion, combine or timeout
    failures) are logged and reported as an error result carrying the
    original message and exception type. ``KeyboardInterrupt`` is not
    intercepted.

    Args:
        build_fn: Zero-argument callable performing the build.
        source: Description of the build root for reporting.
        config: Validated configuration (output format, strategy).
        save_path: Optional file to persist the rendered output to.
    """
    strategy = "effectful" if config.get("effectful") else "pure"
    summary: Dict[str, Any] = {"strategy": strategy, "format": config.get("output_format", "ascii")}

    try:
        tree = build_fn()
    except asyncio.TimeoutError as e:
        message = str(e) or f"Directory listing exceeded the {config.get('timeout_seconds')}s timeout."
        logger.error(f"Tree build timed out for '{source}': {message}")
        return create_error_result(e, source=source, summary=summary, message=message)
    except Exception as e:
        logger.error(f"Tree build failed for '{source}': {type(e).__name__}: {e}")
        return create_error_result(e, source=source, summary=summary)

    lines = render_lines(tree, config.get("output_format", "ascii"))
    node_count = count_nodes(tree)
    max_depth = tree_depth(tree)
    logger.info(f"Built {node_count} nodes (max depth {max_depth}) from '{source}'")

    output_path = ""
    if save_path:
        saved = save_lines(save_path, lines)
        if not saved:
            return create_error_result(f"Failed to save output to '{save_path}'.", source=source, summary=summary)
        output_path = os.path.abspath(save_path)

    return create_success_result(
        source=source,
        lines=lines,
        node_count=node_count,
        max_depth=max_depth,
        output_path=output_path,
        summary=summary,
    )


def render_lines(tree: Tree, output_format: str) -> List[str]:
    """Render a tree as ASCII lines or as the lines of a JSON document."""
    if output_format == "json":
        return render_json(tree).splitlines()
    return render_ascii(tree)


def save_lines(save_path: str, lines: List[str]) -> bool:
    """Persist rendered lines to disk, creating parent directories."""
    out_dir = os.path.dirname(os.path.abspath(save_path))
    ok, err = safe_mkdir(out_dir)
    if not ok:
        logger.error(f"Failed to create output directory '{out_dir}': {err}")
        return False

    try:
        with open(save_path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
    except OSError as e:
        logger.error(f"Failed to save tree to '{save_path}': {e}")
        return False

    logger.info(f"Tree saved to file: {save_path}")
    return True


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _entry_label(entry: FsEntry) -> str:
    """Directories render with a trailing separator."""
    return f"{entry.name}/" if entry.is_dir else entry.name
