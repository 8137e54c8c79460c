"""Hierarchical sales table with baseline variance and allocation edits."""
from .allocation import (
    AbsoluteAllocation,
    AllocationMode,
    PercentageAllocation,
    resolve_allocation,
)
from .derivations import (
    VarianceClass,
    baseline_grand_total,
    flatten,
    grand_total,
    variance_class,
    variance_percent,
)
from .models import Row, RowSeed, Tree, build_tree, round2
from .session import EditSession, TableRow
from .tree_store import apply_edit, find_row

__all__ = [
    "AbsoluteAllocation",
    "AllocationMode",
    "EditSession",
    "PercentageAllocation",
    "Row",
    "RowSeed",
    "TableRow",
    "Tree",
    "VarianceClass",
    "apply_edit",
    "baseline_grand_total",
    "build_tree",
    "find_row",
    "flatten",
    "grand_total",
    "resolve_allocation",
    "round2",
    "variance_class",
    "variance_percent",
]
