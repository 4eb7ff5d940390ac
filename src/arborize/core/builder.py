from __future__ import annotations

"""
Generic Tree Builder.

Builds a result from a root value by recursive expansion. The caller supplies
an expansion function (a value's ordered children) and a combine function
(a value plus its children's already-built results). Two variants are
provided: a pure one and an effectful one whose steps are awaitables.

Both traverse depth-first, left to right, and call combine in post-order.
Failures raised by either function propagate unchanged and abort the build.
Neither variant detects cycles: the expansion relation must be finite and
acyclic over every value reachable from the root.
"""

from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterator,
    List,
    Sequence,
    TypeVar,
)

V = TypeVar("V")
R = TypeVar("R")

ExpandFn = Callable[[V], Sequence[V]]
CombineFn = Callable[[V, Sequence[R]], R]
AsyncExpandFn = Callable[[V], Awaitable[Sequence[V]]]
AsyncCombineFn = Callable[[V, Sequence[R]], Awaitable[R]]

_EXHAUSTED: Any = object()

# -----------------------------------------------------------------------------
# TRAVERSAL STATE
# -----------------------------------------------------------------------------

@dataclass
class _Frame(Generic[V, R]):
    """
    One pending value on the traversal stack.

    Attributes:
        value: The value being built.
        pending: Children not yet built, in expansion order.
        results: Results of the children built so far.
    """
    value: V
    pending: Iterator[V]
    results: List[R] = field(default_factory=list)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build(expand: ExpandFn, combine: CombineFn, root: V) -> R:
    """
    Build the result for ``root`` by recursive expansion.

    Equivalent to::

        combine(root, [build(expand, combine, c) for c in expand(root)])

    but driven by an explicit stack, so the depth of the structure is not
    bounded by the interpreter recursion limit.

    Args:
        expand: Returns the ordered children of a value. Empty means leaf.
        combine: Produces a value's result from the value and its child
            results, given in the order ``expand`` returned the children.
        root: The starting value.

    Returns:
        The result produced by ``combine`` for ``root``.
    """
    stack: List[_Frame] = [_Frame(root, iter(tuple(expand(root))))]

    while True:
        frame = stack[-1]
        child = next(frame.pending, _EXHAUSTED)
        if child is not _EXHAUSTED:
            stack.append(_Frame(child, iter(tuple(expand(child)))))
            continue

        result = combine(frame.value, tuple(frame.results))
        stack.pop()
        if not stack:
            return result
        stack[-1].results.append(result)


async def build_async(
        expand: AsyncExpandFn,
        combine: AsyncCombineFn,
        root: V,
) -> R:
    """
    Effectful counterpart of :func:`build`.

    Awaits ``expand(root)``, then builds each child strictly in order (each
    child finishes before the next starts), then awaits ``combine``. The
    first failure stops the build: no later value in depth-first,
    left-to-right order is expanded or combined.

    Args:
        expand: Returns an awaitable of the ordered children of a value.
        combine: Returns an awaitable of a value's result.
        root: The starting value.

    Returns:
        The result produced by ``combine`` for ``root``.
    """
    stack: List[_Frame] = [_Frame(root, iter(tuple(await expand(root))))]

    while True:
        frame = stack[-1]
        child = next(frame.pending, _EXHAUSTED)
        if child is not _EXHAUSTED:
            children = await expand(child)
            stack.append(_Frame(child, iter(tuple(children))))
            continue

        result = await combine(frame.value, tuple(frame.results))
        stack.pop()
        if not stack:
            return result
        stack[-1].results.append(result)
