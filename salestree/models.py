"""Data models for the hierarchical sales table."""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

DECIMAL_PLACES = 2
_QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)
# Floats at or above this magnitude carry no cent digits.
_NO_CENTS_THRESHOLD = 1e15


def round2(value: float) -> float:
    """Round ``value`` half away from zero to two decimal places.

    The shortest decimal representation of the float is rounded, so ``2.675``
    becomes ``2.68`` rather than the ``2.67`` produced by the binary value.
    Non-finite values and values too large to hold cents are returned as-is.
    """

    value = float(value)
    if not math.isfinite(value) or abs(value) >= _NO_CENTS_THRESHOLD:
        return value
    rounded = Decimal(repr(value)).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0


def subtotal(rows: Iterable["Row"]) -> float:
    """Return the sum of the rows' current values, rounded to cents."""

    return round2(math.fsum(row.value for row in rows))


@dataclass(frozen=True, slots=True)
class Row:
    """A single node of the hierarchy, either a leaf or a subtotal."""

    id: str
    label: str
    value: float
    original_value: float
    level: int = 0
    children: tuple["Row", ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children


Tree = tuple[Row, ...]


@dataclass
class RowSeed:
    """Describes a row of the starting dataset before it becomes a :class:`Row`."""

    id: str
    label: str
    value: float
    children: Iterable["RowSeed"] | None = None


def _seed_value(seed: RowSeed) -> float:
    if isinstance(seed.value, bool):
        raise ValueError(f"Value of row {seed.id!r} must be numeric, got {seed.value!r}")
    try:
        value = float(seed.value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Value of row {seed.id!r} must be numeric, got {seed.value!r}") from exc
    if not math.isfinite(value):
        raise ValueError(f"Value of row {seed.id!r} must be finite, got {seed.value!r}")
    return value


def build_tree(seeds: Iterable[RowSeed]) -> Tree:
    """Build an immutable tree from seeds.

    Every row starts with ``value == original_value``. A :class:`ValueError` is
    raised for non-numeric values and for identifiers used more than once.
    """

    seen: set[str] = set()

    def build(seed: RowSeed, level: int) -> Row:
        if seed.id in seen:
            raise ValueError(f"Duplicate row id: {seed.id!r}")
        seen.add(seed.id)
        value = _seed_value(seed)
        children = tuple(build(child, level + 1) for child in seed.children or ())
        return Row(
            id=seed.id,
            label=seed.label,
            value=value,
            original_value=value,
            level=level,
            children=children,
        )

    return tuple(build(seed, 0) for seed in seeds)


__all__ = [
    "DECIMAL_PLACES",
    "Row",
    "RowSeed",
    "Tree",
    "build_tree",
    "round2",
    "subtotal",
]
