"""Edit operations that keep every subtotal consistent with its children."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from .models import Row, Tree, round2, subtotal

logger = logging.getLogger(__name__)


def find_row(tree: Tree, row_id: str) -> Optional[Row]:
    """Depth-first lookup of a row by identifier."""

    for row in tree:
        if row.id == row_id:
            return row
        found = find_row(row.children, row_id)
        if found is not None:
            return found
    return None


def row_path(tree: Tree, row_id: str) -> tuple[Row, ...]:
    """Return the rows from the root down to ``row_id`` (empty if unknown)."""

    for row in tree:
        if row.id == row_id:
            return (row,)
        below = row_path(row.children, row_id)
        if below:
            return (row, *below)
    return ()


def _split_weights(children: Sequence[Row]) -> list[float]:
    current = [child.value for child in children]
    if sum(current) != 0:
        return current
    baseline = [child.original_value for child in children]
    if sum(baseline) != 0:
        return baseline
    return [1.0] * len(children)


def _distribute(row: Row, target: float) -> Row:
    """Set ``row`` to ``target`` and spread the amount over its descendants."""

    if row.is_leaf:
        return replace(row, value=target)

    weights = _split_weights(row.children)
    total_weight = sum(weights)
    children: list[Row] = []
    allocated = 0.0
    last_index = len(row.children) - 1
    for index, (child, weight) in enumerate(zip(row.children, weights)):
        if index == last_index:
            share = round2(target - allocated)
        else:
            share = round2(target * weight / total_weight)
            allocated += share
        children.append(_distribute(child, share))
    return replace(row, children=tuple(children), value=subtotal(children))


def _apply(rows: Tree, target_id: str, new_value: float) -> Tree:
    updated: list[Row] = []
    changed = False
    for row in rows:
        if not changed and row.id == target_id:
            row = _distribute(row, new_value)
            changed = True
        elif not changed and row.children:
            children = _apply(row.children, target_id, new_value)
            if children is not row.children:
                row = replace(row, children=children, value=subtotal(children))
                changed = True
        updated.append(row)
    return tuple(updated) if changed else rows


def apply_edit(tree: Tree, target_id: str, new_value: float) -> Tree:
    """Return a new tree where ``target_id`` holds ``new_value``.

    The value is rounded to two decimals and every ancestor of the edited row is
    recomputed bottom-up from its children. Editing a subtotal spreads the new
    amount over its descendants in proportion to their current values. Rows
    outside the edited path are shared with the input tree. An unknown
    identifier returns the input tree untouched.
    """

    value = round2(new_value)
    result = _apply(tree, target_id, value)
    if result is tree:
        logger.debug("No row with id %r; edit ignored", target_id)
    else:
        logger.info("Set %r to %.2f", target_id, value)
    return result


__all__ = ["apply_edit", "find_row", "row_path", "subtotal"]
