from __future__ import annotations

from arborize.core.builder import build, build_async
from arborize.core.effects import (
    EffectSuspendedError,
    in_thread,
    lift,
    run_immediate,
    with_timeout,
)
from arborize.core.renderer import ascii_combine, render_ascii, render_json, tree_combine
from arborize.domain.tree_models import Leaf, Node, Tree

__version__ = "0.1.0"

__all__ = [
    "build",
    "build_async",
    "lift",
    "run_immediate",
    "in_thread",
    "with_timeout",
    "EffectSuspendedError",
    "tree_combine",
    "ascii_combine",
    "render_ascii",
    "render_json",
    "Leaf",
    "Node",
    "Tree",
]
