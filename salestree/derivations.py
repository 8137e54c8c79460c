"""Values derived on demand from a tree: variance, ordering and totals."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator

from .models import Row, Tree, round2, subtotal


class VarianceClass(str, Enum):
    ABOVE = "above"
    BELOW = "below"
    EQUAL = "equal"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


def variance_percent(current: float, baseline: float) -> str:
    """Return the change against ``baseline`` as a percentage string.

    A zero baseline always yields ``"0%"``.
    """

    if baseline == 0:
        return "0%"
    variance = round2((current - baseline) / baseline * 100)
    return f"{_format_number(variance)}%"


def variance_class(current: float, baseline: float) -> VarianceClass:
    if current > baseline:
        return VarianceClass.ABOVE
    if current < baseline:
        return VarianceClass.BELOW
    return VarianceClass.EQUAL


def flatten(tree: Iterable[Row]) -> Iterator[Row]:
    """Yield every row depth-first, parents before their children."""

    for row in tree:
        yield row
        yield from flatten(row.children)


def grand_total(tree: Tree) -> float:
    """Sum of the root-level values; subtotals already include their children."""

    return subtotal(tree)


def baseline_grand_total(tree: Tree) -> float:
    """Sum of the root-level baselines.

    Capture this from the initial tree and keep it; it is not meant to be
    recomputed from a tree that has been edited.
    """

    return sum(row.original_value for row in tree)


def subtotal_mismatches(tree: Tree) -> list[str]:
    """Return the ids of subtotal rows that differ from the sum of their children."""

    return [
        row.id
        for row in flatten(tree)
        if row.children and row.value != subtotal(row.children)
    ]


__all__ = [
    "VarianceClass",
    "baseline_grand_total",
    "flatten",
    "grand_total",
    "subtotal_mismatches",
    "variance_class",
    "variance_percent",
]
