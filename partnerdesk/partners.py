"""Partners tab: the partner table with add, edit and delete actions."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any, Callable

from .models import Partner
from .storage import Database, PartnersNotFoundError, StorageError

log = logging.getLogger(__name__)

PARTNER_TYPES = ("ООО", "ИП", "ОАО", "ПАО", "ЗАО")

HEADERS = (
    "",
    "Название Компании",
    "Тип Компании",
    "Директор",
    "Телефон",
    "Рейтинг",
    "Почта",
    "Юр. Адрес",
    "Скидка",
)

COLUMN_WIDTHS = (50, 200, 120, 150, 120, 80, 150, 200, 150)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(2**63), 2**63 - 1


class FormError(ValueError):
    """Raised when the partner form holds invalid data."""


def _parse_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(text)
    return value


def validate_form(
    company_name: str,
    partner_type: str,
    director: str,
    phone: str,
    email: str,
    address: str,
    rating: str,
) -> int:
    """Check the partner form fields and return the parsed rating."""
    if company_name == "":
        raise FormError("Название компании не может быть пустым")
    if partner_type == "":
        raise FormError("Тип компании не может быть пустым")
    if director == "":
        raise FormError("Имя директора не может быть пустым")
    if phone == "":
        raise FormError("Телефон не может быть пустым")
    if email == "":
        raise FormError("Email не может быть пустым")
    if "@" not in email:
        raise FormError("Email должен содержать символ @")
    if address == "":
        raise FormError("Юридический адрес не может быть пустым")
    if rating == "":
        raise FormError("Рейтинг не может быть пустым")
    try:
        value = _parse_int(rating)
    except ValueError:
        raise FormError("Рейтинг должен быть числом") from None
    if value < 0:
        raise FormError("Рейтинг должен быть положительным числом")
    return value


def partner_row(partner: Partner) -> tuple[str, ...]:
    """Return the table cells shown for a partner."""
    return (
        "",
        partner.company_name,
        partner.partner_type,
        partner.director,
        partner.phone,
        str(partner.rating),
        partner.email,
        partner.address,
        f"{partner.discount}%",
    )


def _show_partner_form(
    parent: Any, partner: Partner, on_save: Callable[[Partner], None]
) -> None:
    import tkinter as tk
    from tkinter import messagebox, ttk

    top = tk.Toplevel(parent)
    top.title("Редактировать партнера")
    top.transient(parent.winfo_toplevel())

    fields: dict[str, tk.StringVar] = {}
    layout = (
        ("company_name", "Название Компании", partner.company_name),
        ("partner_type", "Тип компании", partner.partner_type),
        ("director", "Директор", partner.director),
        ("phone", "Телефон", partner.phone),
        ("email", "Email", partner.email),
        ("address", "Юр. Адрес", partner.address),
        ("rating", "Рейтинг", str(partner.rating)),
    )
    for row, (key, title, value) in enumerate(layout):
        ttk.Label(top, text=title).grid(row=row, column=0, sticky="w", padx=6, pady=3)
        var = tk.StringVar(top, value=value)
        fields[key] = var
        if key == "partner_type":
            widget = ttk.Combobox(top, textvariable=var, values=PARTNER_TYPES, state="readonly")
        else:
            widget = ttk.Entry(top, textvariable=var, width=40)
        widget.grid(row=row, column=1, sticky="ew", padx=6, pady=3)

    def save() -> None:
        values = {key: var.get() for key, var in fields.items()}
        try:
            rating = validate_form(
                values["company_name"],
                values["partner_type"],
                values["director"],
                values["phone"],
                values["email"],
                values["address"],
                values["rating"],
            )
        except FormError as exc:
            messagebox.showerror("Ошибка", str(exc), parent=top)
            return
        updated = replace(
            partner,
            company_name=values["company_name"],
            partner_type=values["partner_type"],
            director=values["director"],
            phone=values["phone"],
            email=values["email"],
            address=values["address"],
            rating=rating,
        )
        top.destroy()
        on_save(updated)

    buttons = ttk.Frame(top)
    buttons.grid(row=len(layout), column=0, columnspan=2, pady=6)
    ttk.Button(buttons, text="Сохранить", command=save).pack(side="left", padx=4)
    ttk.Button(buttons, text="Отменить", command=top.destroy).pack(side="left", padx=4)
    top.columnconfigure(1, weight=1)
    top.grab_set()


class PartnersTab:
    """Table of partners with buttons to add and delete them."""

    def __init__(self, parent: Any, db: Database) -> None:
        from tkinter import ttk

        self._db = db
        self.partners: list[Partner] = []
        self.selected_partner_id = 0

        self.frame = ttk.Frame(parent)
        columns = [str(index) for index in range(len(HEADERS))]
        self.tree = ttk.Treeview(
            self.frame, columns=columns, show="headings", selectmode="browse"
        )
        for column, title, width in zip(columns, HEADERS, COLUMN_WIDTHS):
            self.tree.heading(column, text=title)
            self.tree.column(column, width=width, stretch=False)
        xscroll = ttk.Scrollbar(self.frame, orient="horizontal", command=self.tree.xview)
        self.tree.configure(xscrollcommand=xscroll.set)

        buttons = ttk.Frame(self.frame)
        ttk.Button(buttons, text="Добавить Партнера", command=self.add_partner).pack(side="left")
        ttk.Button(buttons, text="Удалить Партнера", command=self.delete_selected).pack(side="left")

        buttons.pack(side="bottom", fill="x")
        xscroll.pack(side="bottom", fill="x")
        self.tree.pack(side="top", fill="both", expand=True)

        self.tree.bind("<<TreeviewSelect>>", self._on_select)
        self.tree.bind("<Double-1>", self._on_double_click)

        try:
            self.refresh()
        except StorageError as exc:
            log.error("%s", exc)

    def refresh(self) -> None:
        """Reload partners from the database and redraw the table."""
        try:
            partners = self._db.get_partners()
        except PartnersNotFoundError:
            partners = []
        self.partners = partners
        self.tree.delete(*self.tree.get_children())
        for partner in partners:
            self.tree.insert("", "end", iid=str(partner.id), values=partner_row(partner))

    def _selected_partner(self) -> Partner | None:
        return next((p for p in self.partners if p.id == self.selected_partner_id), None)

    def _on_select(self, _event: Any = None) -> None:
        selection = self.tree.selection()
        if selection:
            self.selected_partner_id = int(selection[0])

    def _on_double_click(self, event: Any) -> None:
        if self.tree.identify_region(event.x, event.y) != "cell":
            return
        if self.tree.identify_column(event.x) == "#1":
            return
        self._on_select()
        self.edit_selected()

    def _reload_after_change(self) -> None:
        from tkinter import messagebox

        try:
            self.refresh()
        except StorageError as exc:
            log.error("%s", exc)
            messagebox.showerror("Ошибка", str(exc), parent=self.frame)

    def add_partner(self) -> None:
        """Open an empty partner form and store the new partner on save."""
        from tkinter import messagebox

        def save(partner: Partner) -> None:
            try:
                self._db.add_partner(partner)
            except StorageError as exc:
                log.error("%s", exc)
                messagebox.showerror("Ошибка", str(exc), parent=self.frame)
                return
            self._reload_after_change()

        _show_partner_form(self.frame, Partner(), save)

    def delete_selected(self) -> None:
        """Delete the selected partner, telling the user when none is selected."""
        from tkinter import messagebox

        if self.selected_partner_id == 0:
            messagebox.showinfo("Не выбран", "Выберите партнера для удаления", parent=self.frame)
            return
        try:
            self._db.delete_partner(self.selected_partner_id)
        except StorageError as exc:
            log.error("%s", exc)
            messagebox.showerror("Ошибка", str(exc), parent=self.frame)
            return
        self._reload_after_change()
        self.selected_partner_id = 0
        if not self.partners:
            messagebox.showinfo(
                "Нет данных",
                "Все партнеры удалены. Добавьте нового партнера.",
                parent=self.frame,
            )

    def edit_selected(self) -> None:
        """Open the form for the selected partner and store changes on save."""
        from tkinter import messagebox

        partner = self._selected_partner()
        if partner is None:
            return

        def save(updated: Partner) -> None:
            try:
                self._db.update_partner(updated)
            except StorageError as exc:
                messagebox.showerror("Ошибка", str(exc), parent=self.frame)
                return
            try:
                self.refresh()
            except StorageError as exc:
                log.error("%s", exc)

        _show_partner_form(self.frame, partner, save)