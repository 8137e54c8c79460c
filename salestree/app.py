"""Tkinter user interface for the hierarchical sales table."""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional

from .allocation import AllocationMode
from .derivations import VarianceClass
from .models import Tree
from .sample_data import sample_tree
from .session import EditSession, TableRow
from .tree_store import row_path

TOTAL_IID = "__grand_total__"

_VARIANCE_COLOURS: dict[VarianceClass, str] = {
    VarianceClass.ABOVE: "#1b7f3b",
    VarianceClass.BELOW: "#b00020",
    VarianceClass.EQUAL: "#555555",
}


def _format_amount(value: float) -> str:
    """Return the amount rounded to whole units, as the table shows it."""

    return f"{round(value):,}"


class SalesTableApp(ttk.Frame):
    """Main frame hosting the table and the allocation form."""

    def __init__(self, master: tk.Tk, tree: Optional[Tree] = None) -> None:
        super().__init__(master, padding=10)
        self.master.title("Hierarchical Sales Data Table")
        self.session = EditSession(tree if tree is not None else sample_tree())
        self.selected_id: Optional[str] = None
        self._loading_input = False

        self.path_var = tk.StringVar(value="No selection")
        self.input_var = tk.StringVar()
        self.status_var = tk.StringVar(
            value="Select a row, type an amount and press % or Val to allocate."
        )
        self.input_var.trace_add("write", self._on_input_changed)

        self.grid(column=0, row=0, sticky="nsew")
        self.master.rowconfigure(0, weight=1)
        self.master.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        self._create_widgets()
        self.refresh_table()

    # ------------------------------------------------------------------
    # UI construction helpers
    # ------------------------------------------------------------------
    def _create_widgets(self) -> None:
        columns = ("value", "variance")
        self.table = ttk.Treeview(self, columns=columns, show="tree headings", selectmode="browse")
        self.table.heading("#0", text="Label")
        self.table.heading("value", text="Value")
        self.table.heading("variance", text="Variance %")
        self.table.column("#0", width=260)
        self.table.column("value", width=120, anchor="e")
        self.table.column("variance", width=120, anchor="e")
        for variance, colour in _VARIANCE_COLOURS.items():
            self.table.tag_configure(variance.value, foreground=colour)
        self.table.tag_configure("total", font=("TkDefaultFont", 10, "bold"))
        self.table.grid(column=0, row=0, sticky="nsew")
        self.table.bind("<<TreeviewSelect>>", self._on_table_select)

        scrollbar = ttk.Scrollbar(self, orient="vertical", command=self.table.yview)
        scrollbar.grid(column=1, row=0, sticky="ns")
        self.table.configure(yscrollcommand=scrollbar.set)

        form = ttk.LabelFrame(self, text="Allocation", padding=10)
        form.grid(column=0, row=1, columnspan=2, sticky="ew", pady=(10, 0))
        form.columnconfigure(1, weight=1)

        ttk.Label(form, textvariable=self.path_var).grid(column=0, row=0, columnspan=4, sticky="w")
        ttk.Label(form, text="Input").grid(column=0, row=1, sticky="w", pady=(8, 0))
        self.input_entry = ttk.Entry(form, textvariable=self.input_var, width=16)
        self.input_entry.grid(column=1, row=1, sticky="ew", padx=(8, 8), pady=(8, 0))
        self.input_entry.bind("<Return>", lambda _event: self._allocate(AllocationMode.ABSOLUTE))
        ttk.Button(
            form, text="%", width=4, command=lambda: self._allocate(AllocationMode.PERCENTAGE)
        ).grid(column=2, row=1, pady=(8, 0))
        ttk.Button(
            form, text="Val", width=4, command=lambda: self._allocate(AllocationMode.ABSOLUTE)
        ).grid(column=3, row=1, padx=(4, 0), pady=(8, 0))

        ttk.Label(self, textvariable=self.status_var, wraplength=560).grid(
            column=0, row=2, columnspan=2, sticky="w", pady=(8, 0)
        )
        self._set_form_state(False)

    # ------------------------------------------------------------------
    # Table
    # ------------------------------------------------------------------
    def refresh_table(self) -> None:
        self.table.delete(*self.table.get_children())
        parents: dict[int, str] = {}
        for table_row in self.session.table_rows():
            parent = parents.get(table_row.level - 1, "") if table_row.level else ""
            self._insert_row(parent, table_row)
            parents[table_row.level] = table_row.row_id or ""
        total = self.session.total_row()
        self.table.insert(
            "",
            "end",
            iid=TOTAL_IID,
            text=total.label,
            values=(_format_amount(total.value), total.variance),
            tags=("total", total.variance_class.value),
        )
        if self.selected_id and self.table.exists(self.selected_id):
            self.table.selection_set(self.selected_id)
            self.table.focus(self.selected_id)

    def _insert_row(self, parent: str, table_row: TableRow) -> None:
        self.table.insert(
            parent,
            "end",
            iid=table_row.row_id,
            text=table_row.label,
            values=(_format_amount(table_row.value), table_row.variance),
            tags=(table_row.variance_class.value,),
            open=True,
        )

    def _on_table_select(self, event: tk.Event[tk.EventType]) -> None:  # pragma: no cover - UI callback
        selection = self.table.selection()
        if not selection or selection[0] == TOTAL_IID:
            self.selected_id = None
            self.path_var.set("No selection")
            self._load_input("")
            self._set_form_state(False)
            return
        self.selected_id = selection[0]
        path = row_path(self.session.tree, self.selected_id)
        self.path_var.set(" > ".join(row.label for row in path))
        self._load_input(self.session.staged_input(self.selected_id))
        self._set_form_state(True)

    # ------------------------------------------------------------------
    # Form helpers
    # ------------------------------------------------------------------
    def _set_form_state(self, enabled: bool) -> None:
        self.input_entry.config(state="normal" if enabled else "disabled")

    def _load_input(self, text: str) -> None:
        self._loading_input = True
        try:
            self.input_var.set(text)
        finally:
            self._loading_input = False

    def _on_input_changed(self, *_args: object) -> None:
        if self._loading_input or self.selected_id is None:
            return
        self.session.stage_input(self.selected_id, self.input_var.get())

    def _allocate(self, mode: AllocationMode) -> None:
        row_id = self.selected_id
        if row_id is None:
            self.status_var.set("Select a row to allocate.")
            return
        if not self.session.commit(row_id, mode):
            return
        self.refresh_table()
        self._load_input(self.session.staged_input(row_id))
        row = self.session.find(row_id)
        if row is not None:
            self.status_var.set(f"{row.label} set to {row.value:,.2f}.")


def run_app() -> None:  # pragma: no cover - convenience wrapper for CLI usage
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    root = tk.Tk()
    style = ttk.Style(root)
    if "clam" in style.theme_names():
        style.theme_use("clam")
    style.configure("Treeview", rowheight=24)
    SalesTableApp(root)
    root.minsize(560, 360)
    root.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual launch only
    run_app()
