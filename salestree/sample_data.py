"""Sample dataset used as the starting tree of the application."""
from __future__ import annotations

from .models import RowSeed, Tree, build_tree

SAMPLE_ROWS: list[RowSeed] = [
    RowSeed(
        id="electronics",
        label="Electronics",
        value=1500,
        children=[
            RowSeed(id="phones", label="Phones", value=800),
            RowSeed(id="laptops", label="Laptops", value=700),
        ],
    ),
    RowSeed(
        id="furniture",
        label="Furniture",
        value=1000,
        children=[
            RowSeed(id="tables", label="Tables", value=300),
            RowSeed(id="chairs", label="Chairs", value=700),
        ],
    ),
]


def sample_tree() -> Tree:
    return build_tree(SAMPLE_ROWS)
