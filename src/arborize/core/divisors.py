from __future__ import annotations

"""
Divisor Tree Sample.

Expands an integer into its proper divisors, giving a small well-founded
relation that exercises the builder without any I/O.
"""

from typing import List

from arborize.core.builder import build
from arborize.core.renderer import tree_combine
from arborize.domain.tree_models import Tree


def proper_divisors(n: int) -> List[int]:
    """
    Return the divisors of ``n`` strictly smaller than ``n``, ascending.

    Raises:
        ValueError: If ``n`` is not a positive integer.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ValueError(f"Expected a positive integer, received {n!r}.")

    small: List[int] = []
    large: List[int] = []
    d = 1
    while d * d <= n:
        if n % d == 0:
            small.append(d)
            if d != n // d:
                large.append(n // d)
        d += 1

    return [x for x in small + large[::-1] if x < n]


def divisor_children(n: int) -> List[int]:
    """
    Expansion function of the divisor tree.

    Composite numbers expand to all their proper divisors. Primes and 1,
    whose only proper divisor is 1, are leaves.
    """
    divisors = proper_divisors(n)
    if len(divisors) <= 1:
        return []
    return divisors


def divisor_tree(n: int) -> Tree:
    """Build the Leaf/Node tree of ``n`` under divisor_children."""
    return build(divisor_children, tree_combine(), n)
