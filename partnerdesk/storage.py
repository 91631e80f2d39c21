"""SQLite storage for partners, their sales, products and materials."""

from __future__ import annotations

import math
import sqlite3
from datetime import date
from typing import Any

from .models import Partner, PartnerSale


class StorageError(Exception):
    """Raised when the database cannot answer a request."""


class PartnersNotFoundError(StorageError):
    """Raised when no partners are stored."""


class PartnerNotFoundError(StorageError):
    """Raised when a partner search finds nothing."""


_GET_PARTNERS = """SELECT
    p.PartnerId, p.PartnerType, p.PartnerName, p.Director, p.Phone, p.Rating, p.Email, p.LegalAddress,
    CASE
        WHEN SUM(pp.Quantity) < 10000 THEN 0
        WHEN SUM(pp.Quantity) BETWEEN 10000 AND 49999 THEN 5
        WHEN SUM(pp.Quantity) BETWEEN 50000 AND 299999 THEN 10
        WHEN SUM(pp.Quantity) >= 300000 THEN 15
    END AS DiscountPercentage
FROM
    Partners p
JOIN
    PartnerProducts pp ON p.PartnerId = pp.PartnerId
GROUP BY
    p.PartnerId, p.PartnerName;"""

_ADD_PARTNER = (
    "insert into Partners(PartnerType, PartnerName, Director, Phone, Rating, Email, LegalAddress) "
    "values(?, ?, ?, ?, ?, ?, ?)"
)

_DELETE_PARTNER = "delete from Partners where PartnerId = ?"

_UPDATE_PARTNER = (
    "update Partners set PartnerType = ?, PartnerName = ?, Director = ?, Phone = ?, Rating = ? "
    "where PartnerId = ?;"
)

_GET_PARTNER_SALES = """
    SELECT
        p.ProductName AS 'Продукция',
        pp.Quantity AS 'Количество',
        pp.SaleDate AS 'Дата продажи',
        pt.ProductType AS 'Тип продукции',
        (pp.Quantity * p.MinCost) AS 'Общая сумма'
    FROM
        PartnerProducts pp
    JOIN
        Products p ON pp.ProductId = p.ProductId
    JOIN
        ProductTypes pt ON p.ProductTypeId = pt.ProductTypeId
    WHERE
        pp.PartnerId = ?
    ORDER BY
        pp.SaleDate DESC"""

_FIND_BY_ID = "SELECT PartnerId, PartnerName FROM Partners WHERE PartnerId = ?"
_FIND_BY_NAME = "SELECT PartnerId, PartnerName FROM Partners WHERE PartnerName LIKE ? LIMIT 1"

_GET_PRODUCTS = "SELECT ProductId, ProductName FROM Products"
_GET_MATERIAL_TYPES = "SELECT MaterialTypeId, MaterialType FROM MaterialTypes"

_PRODUCT_COEFFICIENT = """
    SELECT pt.Coefficient
    FROM ProductTypes pt
    JOIN Products p ON pt.ProductTypeId = p.ProductTypeId
    WHERE p.ProductId = ?"""

_DEFECT_PERCENTAGE = """
    SELECT DefectPercentage
    FROM MaterialTypes
    WHERE MaterialTypeId = ?"""


def _format_date(value: Any) -> str:
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return str(value)


def _partner_from_row(row: tuple) -> Partner:
    if any(value is None for value in row):
        raise StorageError("partner row contains NULL values")
    pid, ptype, name, director, phone, rating, email, address, discount = row
    return Partner(
        id=int(pid),
        partner_type=str(ptype),
        company_name=str(name),
        director=str(director),
        phone=str(phone),
        rating=int(rating),
        email=str(email),
        address=str(address),
        discount=int(discount),
    )


def _sale_from_row(row: tuple) -> PartnerSale:
    name, quantity, raw_date, ptype, total = row
    if name is None or quantity is None or ptype is None or total is None:
        raise StorageError("ошибка сканирования строки: NULL value")
    try:
        return PartnerSale(
            product_name=str(name),
            quantity=int(quantity),
            sale_date=_format_date(raw_date),
            product_type=str(ptype),
            total_sum=float(total),
        )
    except (TypeError, ValueError) as exc:
        raise StorageError(f"ошибка сканирования строки: {exc}") from exc


class Database:
    """Access to the partners database stored in an SQLite file."""

    def __init__(self, path: str = "test.db") -> None:
        try:
            self._conn = sqlite3.connect(path, isolation_level=None)
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _execute(self, query: str, params: tuple = ()) -> None:
        try:
            self._conn.execute(query, params)
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc

    def get_partners(self) -> list[Partner]:
        """Return every partner that has sales, with its discount percentage."""
        try:
            rows = self._conn.execute(_GET_PARTNERS).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        if not rows:
            raise PartnersNotFoundError("партнеры не найдены")
        return [_partner_from_row(row) for row in rows]

    def add_partner(self, partner: Partner) -> None:
        """Insert a new partner; its id is assigned by the database."""
        self._execute(
            _ADD_PARTNER,
            (
                partner.partner_type,
                partner.company_name,
                partner.director,
                partner.phone,
                partner.rating,
                partner.email,
                partner.address,
            ),
        )

    def delete_partner(self, partner_id: int) -> None:
        """Delete the partner with the given id."""
        self._execute(_DELETE_PARTNER, (partner_id,))

    def update_partner(self, partner: Partner) -> None:
        """Update type, name, director, phone and rating of a partner."""
        self._execute(
            _UPDATE_PARTNER,
            (
                partner.partner_type,
                partner.company_name,
                partner.director,
                partner.phone,
                partner.rating,
                partner.id,
            ),
        )

    def get_partner_sales(self, partner_id: int) -> list[PartnerSale]:
        """Return the sales of a partner, newest first."""
        try:
            rows = self._conn.execute(_GET_PARTNER_SALES, (partner_id,)).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"ошибка выполнения запроса продаж: {exc}") from exc
        return [_sale_from_row(row) for row in rows]

    def find_partner(self, search_term: str) -> tuple[int, str]:
        """Find a partner by exact id, else by part of its name."""
        for query, param in ((_FIND_BY_ID, search_term), (_FIND_BY_NAME, f"%{search_term}%")):
            try:
                row = self._conn.execute(query, (param,)).fetchone()
            except sqlite3.Error:
                continue
            if row is not None and row[0] is not None and row[1] is not None:
                return int(row[0]), str(row[1])
        raise PartnerNotFoundError("партнер не найден")

    def _options(self, query: str) -> list[str]:
        try:
            rows = self._conn.execute(query).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        options = []
        for ident, name in rows:
            if ident is None or name is None:
                raise StorageError("option row contains NULL values")
            options.append(f"{ident} - {name}")
        return options

    def get_products(self) -> list[str]:
        """Return products as "id - name" strings."""
        return self._options(_GET_PRODUCTS)

    def get_material_types(self) -> list[str]:
        """Return material types as "id - name" strings."""
        return self._options(_GET_MATERIAL_TYPES)

    def _scalar(self, query: str, param: Any, message: str) -> float:
        try:
            row = self._conn.execute(query, (param,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(message) from exc
        if row is None or row[0] is None:
            raise StorageError(message)
        try:
            return float(row[0])
        except (TypeError, ValueError) as exc:
            raise StorageError(message) from exc

    def calculate_material(
        self,
        product_id: str,
        material_id: str,
        quantity: int,
        param1: float,
        param2: float,
    ) -> int:
        """Return the whole number of material units needed, defects included."""
        coefficient = self._scalar(
            _PRODUCT_COEFFICIENT, product_id, "не найден коэффициент для продукта"
        )
        defect = self._scalar(
            _DEFECT_PERCENTAGE, material_id, "не найден процент брака для материала"
        )
        total = float(quantity) * (param1 * param2 * coefficient)
        if defect > 0:
            total *= 1 + defect / 100
        return int(math.ceil(total))