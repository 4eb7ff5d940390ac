from __future__ import annotations

"""
Tree Renderer.

Presentation combine functions and renderers for built trees. Converts
Leaf/Node trees into ASCII lines (├──, └── connectors) or JSON documents.
Every traversal here is itself an instance of the generic builder.
"""

import json
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from arborize.core.builder import CombineFn, build
from arborize.domain.tree_models import Leaf, Node, Tree, children_of

LabelFn = Callable[[Any], Any]

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_BLANK = "    "

# -----------------------------------------------------------------------------
# COMBINE FUNCTIONS
# -----------------------------------------------------------------------------

def tree_combine(label_fn: Optional[LabelFn] = None) -> CombineFn:
    """
    Return a combine function producing Leaf/Node trees.

    A value with no child results becomes a ``Leaf``; any other value
    becomes a ``Node`` owning its children in expansion order.

    Args:
        label_fn: Maps a value to its label. Defaults to the value itself.
    """
    to_label = label_fn or (lambda value: value)

    def _combine(value: Any, children: Sequence[Tree]) -> Tree:
        if not children:
            return Leaf(to_label(value))
        return Node(to_label(value), tuple(children))

    return _combine


def ascii_combine(label_fn: LabelFn = str) -> CombineFn:
    """
    Return a combine function producing ASCII lines directly.

    Each child's first line gets a connector and its remaining lines get the
    matching continuation prefix, so the root result is the full drawing.
    """
    def _combine(value: Any, children: Sequence[List[str]]) -> List[str]:
        lines = [str(label_fn(value))]
        total = len(children)
        for i, child_lines in enumerate(children):
            is_last = (i == total - 1)
            connector = _LAST if is_last else _BRANCH
            extension = _BLANK if is_last else _PIPE
            lines.append(connector + child_lines[0])
            lines.extend(extension + line for line in child_lines[1:])
        return lines

    return _combine


# -----------------------------------------------------------------------------
# RENDERERS
# -----------------------------------------------------------------------------

def render_ascii(tree: Tree) -> List[str]:
    """Render a Leaf/Node tree as ASCII lines."""
    return build(children_of, ascii_combine(lambda t: t.label), tree)


def render_json(tree: Tree) -> str:
    """
    Render a Leaf/Node tree as an indented JSON document.

    Labels that are not JSON-native are converted with ``str``.
    """
    output = {
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "total_nodes": count_nodes(tree),
        "max_depth": tree_depth(tree),
        "tree": tree_to_dict(tree),
    }
    return json.dumps(output, ensure_ascii=False, indent=2)


def tree_to_dict(tree: Tree) -> Dict[str, Any]:
    """Convert a Leaf/Node tree into a JSON-serializable dictionary."""
    def _combine(t: Tree, children: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        return {"label": _json_label(t.label), "children": list(children)}

    return build(children_of, _combine, tree)


# -----------------------------------------------------------------------------
# STATISTICS
# -----------------------------------------------------------------------------

def count_nodes(tree: Tree) -> int:
    """Count every node in the tree, root included."""
    return build(children_of, lambda _, counts: 1 + sum(counts), tree)


def tree_depth(tree: Tree) -> int:
    """Return the number of edges on the longest root-to-leaf path."""
    return build(children_of, lambda _, depths: max((1 + d for d in depths), default=0), tree)


def _json_label(label: Any) -> Any:
    if label is None or isinstance(label, (str, int, float, bool)):
        return label
    return str(label)
