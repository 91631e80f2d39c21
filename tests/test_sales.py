import sqlite3

import pytest

from partnerdesk.models import PartnerSale
from partnerdesk.sales import HEADERS, sale_row, search_sales
from partnerdesk.storage import Database, PartnerNotFoundError, StorageError

SCHEMA = """
CREATE TABLE Partners (
    PartnerId INTEGER PRIMARY KEY,
    PartnerType TEXT, PartnerName TEXT, Director TEXT, Phone TEXT,
    Rating INTEGER, Email TEXT, LegalAddress TEXT
);
CREATE TABLE ProductTypes (ProductTypeId INTEGER PRIMARY KEY, ProductType TEXT, Coefficient REAL);
CREATE TABLE Products (
    ProductId INTEGER PRIMARY KEY, ProductTypeId INTEGER, ProductName TEXT, MinCost REAL
);
CREATE TABLE PartnerProducts (
    ProductId INTEGER, PartnerId INTEGER, Quantity INTEGER, SaleDate TEXT
);
CREATE TABLE MaterialTypes (
    MaterialTypeId INTEGER PRIMARY KEY, MaterialType TEXT, DefectPercentage REAL
);
"""


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "sales.db"
    conn = sqlite3.connect(path)
    conn.executescript(SCHEMA)
    conn.executemany(
        "INSERT INTO Partners VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
        [
            (1, "ООО", "Alpha", "Ivanov", "100", 5, "alpha@example.com", "Street 1"),
            (2, "ИП", "Beta", "Petrov", "200", 7, "beta@example.com", "Street 2"),
        ],
    )
    conn.execute("INSERT INTO ProductTypes VALUES (1, 'Wood', 1.5)")
    conn.execute("INSERT INTO Products VALUES (1, 1, 'Plank', 10.0)")
    conn.executemany(
        "INSERT INTO PartnerProducts VALUES (?, ?, ?, ?)",
        [(1, 1, 3, "2024-01-02"), (1, 1, 5, "2024-03-04")],
    )
    conn.commit()
    conn.close()
    return str(path)


@pytest.fixture
def db(db_path):
    with Database(db_path) as database:
        yield database


def test_headers_have_one_per_cell():
    sale = PartnerSale("Plank", 3, "2024-01-02", "Wood", 150.0)
    assert len(sale_row(sale)) == len(HEADERS)


def test_sale_row_formats_cells():
    sale = PartnerSale("Plank", 3, "2024-01-02", "Wood", 150.0)
    assert sale_row(sale) == (
        "Plank",
        "3",
        "2024-01-02",
        "Wood",
        "150.00 ₽",
        "30.00 ₽",
    )


def test_search_by_id(db):
    partner_id, name, sales = search_sales(db, "1")
    assert (partner_id, name) == (1, "Alpha")
    assert [s.sale_date for s in sales] == ["2024-03-04", "2024-01-02"]
    assert [s.quantity for s in sales] == [5, 3]


def test_search_trims_whitespace(db):
    partner_id, name, _ = search_sales(db, "  2  ")
    assert (partner_id, name) == (2, "Beta")


def test_search_by_part_of_name(db):
    partner_id, name, _ = search_sales(db, "lph")
    assert (partner_id, name) == (1, "Alpha")


def test_partner_without_sales_has_empty_list(db):
    _, _, sales = search_sales(db, "Beta")
    assert sales == []


def test_sales_total_matches_quantity_times_cost(db):
    _, _, sales = search_sales(db, "1")
    assert [s.total_sum for s in sales] == [s.quantity * 10.0 for s in sales]


@pytest.mark.parametrize("term", ["", "   "])
def test_empty_search_term_is_rejected(db, term):
    with pytest.raises(ValueError, match="Введите ID или имя партнера"):
        search_sales(db, term)


def test_unknown_partner_raises(db):
    with pytest.raises(PartnerNotFoundError):
        search_sales(db, "Gamma")


def test_sales_failure_is_wrapped(db_path):
    conn = sqlite3.connect(db_path)
    conn.execute("DROP TABLE Products")
    conn.commit()
    conn.close()
    with Database(db_path) as database:
        with pytest.raises(StorageError, match="^ошибка получения продаж"):
            search_sales(database, "1")