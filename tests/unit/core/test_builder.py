from __future__ import annotations

"""
Unit tests for the pure Tree Builder.

Verifies:
1. Post-order, visit-once traversal over finite acyclic relations.
2. Child result order matches expansion order.
3. Leaf handling (empty expansion).
4. Unchanged propagation and short-circuit of failures.
5. Depth beyond the interpreter recursion limit.
"""

import sys
from typing import Dict, List, Sequence, Tuple

import pytest

from arborize.core.builder import build
from arborize.domain.tree_models import Leaf, Node

# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

GRAPH: Dict[str, List[str]] = {
    "root": ["a", "b", "c"],
    "a": ["a1", "a2"],
    "b": [],
    "c": ["c1"],
    "a1": [],
    "a2": [],
    "c1": [],
}


class Recorder:
    """Wraps expand/combine over a dict relation and records every call."""

    def __init__(self, graph: Dict[str, List[str]]) -> None:
        self.graph = graph
        self.events: List[Tuple[str, str]] = []

    def expand(self, value: str) -> List[str]:
        self.events.append(("expand", value))
        return list(self.graph[value])

    def combine(self, value: str, children: Sequence[str]) -> str:
        self.events.append(("combine", value))
        if not children:
            return value
        return f"{value}({','.join(children)})"

    def calls(self, kind: str) -> List[str]:
        return [v for k, v in self.events if k == kind]


# -----------------------------------------------------------------------------
# Traversal properties
# -----------------------------------------------------------------------------

def test_build_produces_nested_result_in_expansion_order() -> None:
    """Child results reach combine in the order expand returned them."""
    rec = Recorder(GRAPH)
    assert build(rec.expand, rec.combine, "root") == "root(a(a1,a2),b,c(c1))"


def test_build_visits_every_value_exactly_once() -> None:
    """Every reachable value is expanded once and combined once."""
    rec = Recorder(GRAPH)
    build(rec.expand, rec.combine, "root")

    assert sorted(rec.calls("expand")) == sorted(GRAPH)
    assert sorted(rec.calls("combine")) == sorted(GRAPH)


def test_build_is_depth_first_left_to_right_post_order() -> None:
    """A value is combined only after all of its children are combined."""
    rec = Recorder(GRAPH)
    build(rec.expand, rec.combine, "root")

    assert rec.events == [
        ("expand", "root"),
        ("expand", "a"),
        ("expand", "a1"),
        ("combine", "a1"),
        ("expand", "a2"),
        ("combine", "a2"),
        ("combine", "a"),
        ("expand", "b"),
        ("combine", "b"),
        ("expand", "c"),
        ("expand", "c1"),
        ("combine", "c1"),
        ("combine", "c"),
        ("combine", "root"),
    ]


def test_build_shared_values_are_built_per_occurrence() -> None:
    """The builder has no memoization: a value reachable twice is built twice."""
    graph = {"r": ["x", "x"], "x": []}
    rec = Recorder(graph)

    assert build(rec.expand, rec.combine, "r") == "r(x,x)"
    assert rec.calls("expand").count("x") == 2


def test_build_single_leaf_calls_combine_with_empty_sequence() -> None:
    """A value with no children: expand once, combine(value, ())."""
    expand_calls: List[int] = []
    seen: List[Tuple[int, Tuple[object, ...]]] = []

    def expand(v: int) -> List[int]:
        expand_calls.append(v)
        return []

    def combine(v: int, children: Sequence[object]) -> str:
        seen.append((v, tuple(children)))
        return "leaf"

    assert build(expand, combine, 7) == "leaf"
    assert expand_calls == [7]
    assert seen == [(7, ())]


def test_build_accepts_generator_expansions() -> None:
    """Any iterable returned by expand is materialized in order."""
    def expand(n: int):
        return (n - 1 for _ in range(2)) if n > 0 else iter(())

    def combine(n: int, children: Sequence[int]) -> int:
        return 1 + sum(children)

    # Full binary tree of height 3: 2**4 - 1 nodes
    assert build(expand, combine, 3) == 15


def test_build_leaf_and_node_results() -> None:
    """The combine function alone decides leaf vs node."""
    def combine(v: str, children: Sequence[object]):
        return Node(v, tuple(children)) if children else Leaf(v)

    tree = build(lambda v: GRAPH[v], combine, "c")
    assert tree == Node("c", (Leaf("c1"),))


def test_build_handles_depth_beyond_recursion_limit() -> None:
    """A linear chain deeper than the recursion limit still builds."""
    depth = sys.getrecursionlimit() + 500

    def expand(n: int) -> List[int]:
        return [n + 1] if n < depth else []

    def combine(n: int, children: Sequence[int]) -> int:
        return children[0] if children else n

    assert build(expand, combine, 0) == depth

# -----------------------------------------------------------------------------
# Failure propagation
# -----------------------------------------------------------------------------

class Boom(Exception):
    pass


def test_build_root_expansion_failure_skips_all_combines() -> None:
    """Expanding the root fails: the failure surfaces and combine never runs."""
    combined: List[str] = []
    error = Boom("cannot list root")

    def expand(v: str) -> List[str]:
        raise error

    def combine(v: str, children: Sequence[str]) -> str:
        combined.append(v)
        return v

    with pytest.raises(Boom) as exc_info:
        build(expand, combine, "root")

    assert exc_info.value is error
    assert combined == []


def test_build_child_failure_short_circuits_later_siblings() -> None:
    """Failure while expanding 'a1' stops everything after it."""
    rec = Recorder(GRAPH)
    original = rec.expand

    def expand(v: str) -> List[str]:
        if v == "a1":
            rec.events.append(("expand", v))
            raise Boom(v)
        return original(v)

    with pytest.raises(Boom, match="a1"):
        build(expand, rec.combine, "root")

    assert rec.events == [("expand", "root"), ("expand", "a"), ("expand", "a1")]


def test_build_combine_failure_propagates_unchanged() -> None:
    """Failure in combine for 'b' aborts before 'c' is touched."""
    rec = Recorder(GRAPH)
    original = rec.combine

    def combine(v: str, children: Sequence[str]) -> str:
        if v == "b":
            raise KeyError("b")
        return original(v, children)

    with pytest.raises(KeyError):
        build(rec.expand, combine, "root")

    assert "c" not in rec.calls("expand")
    assert "root" not in rec.calls("combine")
