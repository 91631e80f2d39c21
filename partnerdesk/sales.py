"""Sales tab: look up a partner and list its sales."""

from __future__ import annotations

from typing import Any

from .models import PartnerSale
from .storage import Database, PartnerNotFoundError, StorageError

HEADERS = (
    "Продукция",
    "Количество",
    "Дата продажи",
    "Тип продукции",
    "Сумма",
    "Прибыль",
)

COLUMN_WIDTHS = (200, 100, 120, 150, 120, 120)

PROFIT_RATE = 0.2


def sale_row(sale: PartnerSale) -> tuple[str, ...]:
    """Return the table cells shown for a sale."""
    profit = sale.total_sum * PROFIT_RATE
    return (
        sale.product_name,
        str(sale.quantity),
        sale.sale_date,
        sale.product_type,
        f"{sale.total_sum:.2f} ₽",
        f"{profit:.2f} ₽",
    )


def search_sales(db: Database, search_term: str) -> tuple[int, str, list[PartnerSale]]:
    """Find a partner by id or part of its name and return its id, name and sales.

    Raises ValueError for an empty search term, PartnerNotFoundError when no
    partner matches and StorageError when the sales cannot be read.
    """
    term = search_term.strip()
    if term == "":
        raise ValueError("Введите ID или имя партнера")
    partner_id, partner_name = db.find_partner(term)
    try:
        sales = db.get_partner_sales(partner_id)
    except StorageError as exc:
        raise StorageError(f"ошибка получения продаж: {exc}") from exc
    return partner_id, partner_name, sales


class SalesTab:
    """Search box and a table of the sales of the partner that was found."""

    def __init__(self, parent: Any, db: Database) -> None:
        import tkinter as tk
        from tkinter import ttk

        self._db = db
        self.sales: list[PartnerSale] = []
        self.frame = ttk.Frame(parent)
        self._term = tk.StringVar(self.frame)
        self._result = tk.StringVar(self.frame)

        top = ttk.Frame(self.frame)
        top.pack(side="top", fill="x", padx=6, pady=4)

        search_box = ttk.Frame(top)
        search_box.pack(side="top", fill="x")
        ttk.Label(search_box, text="Поиск:").pack(side="left")
        ttk.Button(search_box, text="Поиск", command=self.search).pack(side="right")
        entry = ttk.Entry(search_box, textvariable=self._term, width=50)
        entry.pack(side="left", fill="x", expand=True, padx=4)
        entry.bind("<Return>", lambda _event: self.search())

        ttk.Label(top, textvariable=self._result, wraplength=900, justify="left").pack(
            side="top", anchor="w", pady=4
        )
        ttk.Separator(top).pack(side="top", fill="x")

        table = ttk.Frame(self.frame)
        table.pack(side="top", fill="both", expand=True)
        columns = [str(index) for index in range(len(HEADERS))]
        self.tree = ttk.Treeview(table, columns=columns, show="headings")
        for column, title, width in zip(columns, HEADERS, COLUMN_WIDTHS):
            self.tree.heading(column, text=title)
            self.tree.column(column, width=width, stretch=False)
        yscroll = ttk.Scrollbar(table, orient="vertical", command=self.tree.yview)
        xscroll = ttk.Scrollbar(table, orient="horizontal", command=self.tree.xview)
        self.tree.configure(yscrollcommand=yscroll.set, xscrollcommand=xscroll.set)
        yscroll.pack(side="right", fill="y")
        xscroll.pack(side="bottom", fill="x")
        self.tree.pack(side="top", fill="both", expand=True)

    def search(self) -> None:
        """Search for the partner typed in the box and show its sales."""
        from tkinter import messagebox

        term = self._term.get()
        if term.strip() == "":
            messagebox.showinfo("Ошибка", "Введите ID или имя партнера", parent=self.frame)
            return
        try:
            partner_id, partner_name = self._db.find_partner(term.strip())
        except PartnerNotFoundError:
            messagebox.showinfo("Не найдено", "Партнер не найден", parent=self.frame)
            return

        self._result.set(f"Продажи партнера: {partner_name} (ID: {partner_id})")

        try:
            sales = self._db.get_partner_sales(partner_id)
        except StorageError as exc:
            messagebox.showerror(
                "Ошибка", f"ошибка получения продаж: {exc}", parent=self.frame
            )
            return

        self.sales = sales
        self.tree.delete(*self.tree.get_children())
        for sale in sales:
            self.tree.insert("", "end", values=sale_row(sale))