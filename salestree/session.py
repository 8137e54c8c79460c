"""Editing session that owns the live tree and the per-row staged inputs."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

from .allocation import AllocationMode, resolve_allocation
from .derivations import (
    VarianceClass,
    baseline_grand_total,
    flatten,
    grand_total,
    subtotal_mismatches,
    variance_class,
    variance_percent,
)
from .models import Row, Tree
from .tree_store import apply_edit, find_row

logger = logging.getLogger(__name__)

GRAND_TOTAL_LABEL = "Grand Total"


@dataclass(slots=True)
class TableRow:
    """A display-ready line of the hierarchical table."""

    row_id: Optional[str]
    label: str
    level: int
    value: float
    variance: str
    variance_class: VarianceClass
    staged_input: str = ""


class EditSession:
    """Holds the current tree, its starting grand total and the staged inputs.

    Edits are applied one at a time; each one replaces :attr:`tree` with a new
    tree value.
    """

    def __init__(self, tree: Tree) -> None:
        self.tree: Tree = tuple(tree)
        self.baseline_total: float = baseline_grand_total(self.tree)
        self._staged: Dict[str, str] = {}
        mismatches = subtotal_mismatches(self.tree)
        if mismatches:
            logger.warning(
                "Starting dataset has subtotals that differ from their children: %s",
                ", ".join(mismatches),
            )

    # ------------------------------------------------------------------
    # Staged input
    # ------------------------------------------------------------------
    def stage_input(self, row_id: str, text: str) -> None:
        self._staged[row_id] = text

    def staged_input(self, row_id: str) -> str:
        return self._staged.get(row_id, "")

    def clear_input(self, row_id: str) -> None:
        self._staged.pop(row_id, None)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def allocate(self, row_id: str, raw_input: object, mode: Union[AllocationMode, str]) -> bool:
        """Resolve ``raw_input`` for ``row_id`` and apply it; ``False`` when nothing changed."""

        row = find_row(self.tree, row_id)
        if row is None:
            logger.debug("No row with id %r; allocation ignored", row_id)
            return False
        value = resolve_allocation(row, raw_input, mode)
        if value is None:
            return False
        self.tree = apply_edit(self.tree, row_id, value)
        return True

    def commit(self, row_id: str, mode: Union[AllocationMode, str]) -> bool:
        """Apply the staged input of ``row_id`` and clear it when the edit succeeds."""

        if not self.allocate(row_id, self.staged_input(row_id), mode):
            return False
        self.clear_input(row_id)
        return True

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    def find(self, row_id: str) -> Optional[Row]:
        return find_row(self.tree, row_id)

    def grand_total(self) -> float:
        return grand_total(self.tree)

    def table_rows(self) -> list[TableRow]:
        return [
            TableRow(
                row_id=row.id,
                label=row.label,
                level=row.level,
                value=row.value,
                variance=variance_percent(row.value, row.original_value),
                variance_class=variance_class(row.value, row.original_value),
                staged_input=self.staged_input(row.id),
            )
            for row in flatten(self.tree)
        ]

    def total_row(self) -> TableRow:
        total = self.grand_total()
        return TableRow(
            row_id=None,
            label=GRAND_TOTAL_LABEL,
            level=0,
            value=total,
            variance=variance_percent(total, self.baseline_total),
            variance_class=variance_class(total, self.baseline_total),
        )


__all__ = ["EditSession", "GRAND_TOTAL_LABEL", "TableRow"]
