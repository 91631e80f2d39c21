import sqlite3

import pytest

from partnerdesk.models import Partner
from partnerdesk.storage import (
    Database,
    PartnerNotFoundError,
    PartnersNotFoundError,
    StorageError,
)

SCHEMA = """
CREATE TABLE Partners (
    PartnerId INTEGER PRIMARY KEY AUTOINCREMENT,
    PartnerType TEXT, PartnerName TEXT, Director TEXT, Phone TEXT,
    Rating INTEGER, Email TEXT, LegalAddress TEXT
);
CREATE TABLE ProductTypes (
    ProductTypeId INTEGER PRIMARY KEY, ProductType TEXT, Coefficient REAL
);
CREATE TABLE Products (
    ProductId INTEGER PRIMARY KEY, ProductTypeId INTEGER, ProductName TEXT, MinCost REAL
);
CREATE TABLE MaterialTypes (
    MaterialTypeId INTEGER PRIMARY KEY, MaterialType TEXT, DefectPercentage REAL
);
CREATE TABLE PartnerProducts (
    Id INTEGER PRIMARY KEY AUTOINCREMENT,
    ProductId INTEGER, PartnerId INTEGER, Quantity INTEGER, SaleDate TEXT
);
INSERT INTO ProductTypes VALUES (1, 'Ламинат', 1.5), (2, 'Паркет', 2.0);
INSERT INTO Products VALUES (1, 1, 'Доска', 100.0), (2, 2, 'Плитка', 10.0);
INSERT INTO MaterialTypes VALUES (1, 'Тип 1', 10.0), (2, 'Тип 2', 0.0);
"""


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "partners.db"
    conn = sqlite3.connect(path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
    return str(path)


@pytest.fixture
def db(db_path):
    with Database(db_path) as database:
        yield database


def _raw(db_path, sql, params=()):
    conn = sqlite3.connect(db_path)
    conn.execute(sql, params)
    conn.commit()
    conn.close()


def _partner(name="Альфа"):
    return Partner(
        company_name=name,
        partner_type="ООО",
        director="Иванов",
        phone="+7 000",
        rating=5,
        email="info@example.com",
        address="Москва",
    )


def _sale(db_path, partner_id, quantity, date="2024-01-01", product_id=1):
    _raw(
        db_path,
        "INSERT INTO PartnerProducts(ProductId, PartnerId, Quantity, SaleDate) VALUES (?, ?, ?, ?)",
        (product_id, partner_id, quantity, date),
    )


def test_empty_database_raises_partners_not_found(db):
    with pytest.raises(PartnersNotFoundError):
        db.get_partners()


def test_added_partner_without_sales_is_not_listed(db, db_path):
    db.add_partner(_partner())
    with pytest.raises(PartnersNotFoundError):
        db.get_partners()


def test_added_partner_round_trip(db, db_path):
    db.add_partner(_partner())
    _sale(db_path, 1, 10)
    partners = db.get_partners()
    assert len(partners) == 1
    got = partners[0]
    assert got.id == 1
    assert got.company_name == "Альфа"
    assert got.partner_type == "ООО"
    assert got.director == "Иванов"
    assert got.email == "info@example.com"
    assert got.address == "Москва"
    assert got.rating == 5


@pytest.mark.parametrize(
    "quantity, discount",
    [(9999, 0), (10000, 5), (49999, 5), (50000, 10), (299999, 10), (300000, 15)],
)
def test_discount_tiers(db, db_path, quantity, discount):
    db.add_partner(_partner())
    _sale(db_path, 1, quantity)
    assert db.get_partners()[0].discount == discount


def test_discount_uses_sum_of_sales(db, db_path):
    db.add_partner(_partner())
    _sale(db_path, 1, 5000)
    _sale(db_path, 1, 5000)
    assert db.get_partners()[0].discount == 5


def test_delete_partner(db, db_path):
    db.add_partner(_partner("Альфа"))
    db.add_partner(_partner("Бета"))
    _sale(db_path, 1, 1)
    _sale(db_path, 2, 1)
    db.delete_partner(1)
    names = [p.company_name for p in db.get_partners()]
    assert names == ["Бета"]


def test_update_partner_changes_only_listed_fields(db, db_path):
    db.add_partner(_partner())
    _sale(db_path, 1, 1)
    original = db.get_partners()[0]
    original.company_name = "Гамма"
    original.rating = 9
    original.email = "other@example.com"
    db.update_partner(original)
    got = db.get_partners()[0]
    assert got.company_name == "Гамма"
    assert got.rating == 9
    assert got.email == "info@example.com"


def test_partner_sales_newest_first(db, db_path):
    db.add_partner(_partner())
    _sale(db_path, 1, 1, "2023-05-01")
    _sale(db_path, 1, 2, "2024-02-10")
    _sale(db_path, 1, 3, "2023-12-31")
    sales = db.get_partner_sales(1)
    dates = [s.sale_date for s in sales]
    assert dates == sorted(dates, reverse=True)
    assert [s.quantity for s in sales] == [2, 3, 1]


def test_partner_sale_fields(db, db_path):
    db.add_partner(_partner())
    _sale(db_path, 1, 2, "2024-02-10")
    sale = db.get_partner_sales(1)[0]
    assert sale.product_name == "Доска"
    assert sale.product_type == "Ламинат"
    assert sale.total_sum == pytest.approx(200.0)


def test_partner_sale_blob_date_is_decoded(db, db_path):
    db.add_partner(_partner())
    _sale(db_path, 1, 1, b"2024-03-04")
    assert db.get_partner_sales(1)[0].sale_date == "2024-03-04"


def test_partner_without_sales_has_empty_list(db):
    db.add_partner(_partner())
    assert db.get_partner_sales(1) == []


def test_find_partner_by_id(db):
    db.add_partner(_partner("Альфа"))
    db.add_partner(_partner("Бета"))
    assert db.find_partner("2") == (2, "Бета")


def test_find_partner_by_name_fragment(db):
    db.add_partner(_partner("Альфа Строй"))
    assert db.find_partner("Строй") == (1, "Альфа Строй")


def test_find_partner_missing(db):
    db.add_partner(_partner("Альфа"))
    with pytest.raises(PartnerNotFoundError):
        db.find_partner("Омега")


def test_products_and_materials_options(db):
    assert db.get_products() == ["1 - Доска", "2 - Плитка"]
    assert db.get_material_types() == ["1 - Тип 1", "2 - Тип 2"]


def test_calculate_material_with_defect(db):
    assert db.calculate_material("1", "1", 2, 3.0, 4.0) == 40


def test_calculate_material_defect_increases_result(db):
    without_defect = db.calculate_material("1", "2", 7, 1.3, 2.1)
    with_defect = db.calculate_material("1", "1", 7, 1.3, 2.1)
    assert with_defect >= without_defect


def test_calculate_material_rounds_up(db):
    result = db.calculate_material("2", "2", 1, 0.1, 0.2)
    assert result == 1


def test_calculate_material_unknown_product(db):
    with pytest.raises(StorageError, match="коэффициент"):
        db.calculate_material("99", "1", 1, 1.0, 1.0)


def test_calculate_material_unknown_material(db):
    with pytest.raises(StorageError, match="процент брака"):
        db.calculate_material("1", "99", 1, 1.0, 1.0)


def test_missing_tables_raise_storage_error(tmp_path):
    with Database(str(tmp_path / "empty.db")) as database:
        with pytest.raises(StorageError):
            database.get_products()