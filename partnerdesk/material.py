"""Material calculation tab."""

from __future__ import annotations

import math
import re
from typing import Any

from .storage import Database, StorageError

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(2**63), 2**63 - 1

_QUANTITY_HINT = (re.compile(r"^[1-9]\d*$"), "Должно быть целое число > 0")
_PARAM_HINT = (re.compile(r"^[0-9]*\.?[0-9]+$"), "Должно быть число > 0")


def _parse_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(text)
    return value


def _parse_float(text: str) -> float:
    if text != text.strip() or "_" in text or not text:
        raise ValueError(text)
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(text)
    return value


def option_id(option: str) -> str:
    """Return the id part of an "id - name" option."""
    return option.split(" - ")[0]


def calculate_result(
    db: Database,
    product: str,
    material: str,
    quantity: str,
    param1: str,
    param2: str,
) -> str:
    """Run the material calculation on form input and return the text to show."""
    if product == "" or material == "":
        return "Выберите продукт и материал"
    try:
        count = _parse_int(quantity)
    except ValueError:
        return "Некорректное количество"
    try:
        first = _parse_float(param1)
    except ValueError:
        return "Некорректный параметр 1"
    try:
        second = _parse_float(param2)
    except ValueError:
        return "Некорректный параметр 2"
    try:
        required = db.calculate_material(
            option_id(product), option_id(material), count, first, second
        )
    except StorageError as exc:
        return "Ошибка расчета: " + str(exc)
    return f"Требуется материала: {required} единиц"


class MaterialsTab:
    """Form that computes the material needed to make a batch of products."""

    def __init__(self, parent: Any, db: Database) -> None:
        import tkinter as tk
        from tkinter import ttk

        self._db = db
        self.frame = ttk.Frame(parent)
        self._product = tk.StringVar(self.frame)
        self._material = tk.StringVar(self.frame)
        self._quantity = tk.StringVar(self.frame)
        self._param1 = tk.StringVar(self.frame)
        self._param2 = tk.StringVar(self.frame)
        self._result = tk.StringVar(self.frame)

        try:
            products = db.get_products()
        except StorageError as exc:
            ttk.Label(self.frame, text="Ошибка загрузки продуктов: " + str(exc)).pack()
            return
        try:
            materials = db.get_material_types()
        except StorageError as exc:
            ttk.Label(self.frame, text="Ошибка загрузки типов материалов: " + str(exc)).pack()
            return

        ttk.Label(self.frame, text="Расчет необходимого материала").pack(anchor="w", padx=6, pady=4)
        ttk.Separator(self.frame).pack(fill="x")

        form = ttk.Frame(self.frame)
        form.pack(fill="x", padx=6, pady=4)
        rows = (
            ("Продукт:", self._product, products, None),
            ("Материал:", self._material, materials, None),
            ("Количество:", self._quantity, None, _QUANTITY_HINT),
            ("Параметр 1:", self._param1, None, _PARAM_HINT),
            ("Параметр 2:", self._param2, None, _PARAM_HINT),
        )
        for row, (title, var, options, hint) in enumerate(rows):
            ttk.Label(form, text=title).grid(row=row, column=0, sticky="w", pady=2)
            if options is not None:
                widget = ttk.Combobox(form, textvariable=var, values=options, state="readonly", width=40)
            else:
                widget = ttk.Entry(form, textvariable=var, width=43)
            widget.grid(row=row, column=1, sticky="ew", pady=2)
            if hint is not None:
                self._attach_hint(form, row, var, hint)
        form.columnconfigure(1, weight=1)

        ttk.Button(self.frame, text="Рассчитать", command=self.calculate).pack(anchor="w", padx=6, pady=4)
        ttk.Separator(self.frame).pack(fill="x")
        ttk.Label(self.frame, textvariable=self._result, font=("TkDefaultFont", 10, "bold")).pack(
            anchor="w", padx=6, pady=4
        )

    @staticmethod
    def _attach_hint(form: Any, row: int, var: Any, hint: tuple) -> None:
        import tkinter as tk
        from tkinter import ttk

        pattern, message = hint
        text = tk.StringVar(form)

        def update(*_args: Any) -> None:
            value = var.get()
            text.set("" if value == "" or pattern.match(value) else message)

        var.trace_add("write", update)
        ttk.Label(form, textvariable=text, foreground="#f44336").grid(row=row, column=2, sticky="w", padx=4)

    def calculate(self) -> str:
        """Compute the result from the form, show it and return it."""
        result = calculate_result(
            self._db,
            self._product.get(),
            self._material.get(),
            self._quantity.get(),
            self._param1.get(),
            self._param2.get(),
        )
        self._result.set(result)
        return result