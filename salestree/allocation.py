"""Translate raw user input into the absolute value assigned to a row."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .models import Row, round2

logger = logging.getLogger(__name__)


class AllocationMode(str, Enum):
    ABSOLUTE = "absolute"
    PERCENTAGE = "percentage"


@dataclass(frozen=True, slots=True)
class AbsoluteAllocation:
    """Replace the row value with ``amount``."""

    amount: float

    def target_for(self, row: Row) -> float:
        return self.amount


@dataclass(frozen=True, slots=True)
class PercentageAllocation:
    """Move the row ``percent`` percent away from its baseline.

    The result is always relative to ``original_value``, so applying ``+10``
    and then ``-10`` lands on 90% of the baseline, not on 99%.
    """

    percent: float

    def target_for(self, row: Row) -> float:
        return row.original_value * (1 + self.percent / 100)


Allocation = Union[AbsoluteAllocation, PercentageAllocation]


def parse_amount(raw: object) -> float:
    """Return ``raw`` as a finite float.

    Accepts numbers and numeric strings with optional surrounding whitespace.
    Raises :class:`ValueError` for empty, non-numeric or non-finite input.
    """

    if raw is None or isinstance(raw, bool):
        raise ValueError(f"Not a number: {raw!r}")
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise ValueError("Amount is empty.")
        if "_" in text:
            raise ValueError(f"Not a number: {raw!r}")
        try:
            value = float(text)
        except ValueError as exc:
            raise ValueError(f"Not a number: {raw!r}") from exc
    else:
        raise ValueError(f"Not a number: {raw!r}")
    if not math.isfinite(value):
        raise ValueError(f"Amount must be finite: {raw!r}")
    return value


def try_parse_amount(raw: object) -> Optional[float]:
    """Best-effort parsing that returns ``None`` for invalid input."""

    try:
        return parse_amount(raw)
    except ValueError:
        return None


def parse_allocation(raw: object, mode: Union[AllocationMode, str]) -> Optional[Allocation]:
    mode = AllocationMode(mode)
    amount = try_parse_amount(raw)
    if amount is None:
        return None
    if mode is AllocationMode.PERCENTAGE:
        return PercentageAllocation(percent=amount)
    return AbsoluteAllocation(amount=amount)


def resolve_allocation(
    row: Row, raw_input: object, mode: Union[AllocationMode, str]
) -> Optional[float]:
    """Return the rounded absolute value for ``row``, or ``None`` to skip the edit.

    An unknown ``mode`` raises :class:`ValueError`; bad input never does.
    """

    mode = AllocationMode(mode)
    allocation = parse_allocation(raw_input, mode)
    if allocation is None:
        logger.debug(
            "Skipping %s allocation for %r: unparseable input %r", mode.value, row.id, raw_input
        )
        return None
    target = allocation.target_for(row)
    if not math.isfinite(target):
        logger.debug("Skipping %s allocation for %r: result overflows", mode.value, row.id)
        return None
    return round2(target)


__all__ = [
    "AbsoluteAllocation",
    "Allocation",
    "AllocationMode",
    "PercentageAllocation",
    "parse_allocation",
    "parse_amount",
    "resolve_allocation",
    "try_parse_amount",
]
