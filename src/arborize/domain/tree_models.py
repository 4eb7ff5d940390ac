from __future__ import annotations

"""
Tree Structure Data Models.

Provides the tagged two-variant tree type produced by the presentation
combine functions and the filesystem entry consumed by the filesystem
expansion functions.
"""

from dataclasses import dataclass, field
from typing import Any, Tuple, Union

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Leaf:
    """
    Terminal node of a built tree.

    Attributes:
        label: Display payload of the node.
    """
    label: Any


@dataclass(frozen=True)
class Node:
    """
    Internal node of a built tree. Exclusively owns its children.

    Attributes:
        label: Display payload of the node.
        children: Ordered child subtrees.
    """
    label: Any
    children: Tuple["Tree", ...] = field(default_factory=tuple)


Tree = Union[Leaf, Node]


def children_of(tree: Tree) -> Tuple[Tree, ...]:
    """Return the ordered children of a tree node (empty for leaves)."""
    if isinstance(tree, Node):
        return tree.children
    return ()


# -----------------------------------------------------------------------------
# FILESYSTEM VALUES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FsEntry:
    """
    A filesystem entry as seen by the directory expansion functions.

    Attributes:
        path: Absolute filesystem path.
        name: Base name used for display.
        depth: Distance from the root entry (root is 0).
        is_dir: Whether the entry is a directory that may be expanded.
    """
    path: str
    name: str
    depth: int = 0
    is_dir: bool = False
