# partnerdesk

A small desktop application for keeping track of business partners. It works
on an SQLite database and opens a window with three tabs:

- **Партнеры**: the partner list with company type, director, phone,
  rating, e-mail, legal address and the discount earned from the total
  quantity of products sold (0 %, 5 %, 10 % or 15 %). Partners can be
  added with the "Добавить Партнера" button, edited by double-clicking a
  row, and deleted with "Удалить Партнера" after selecting a row.
- **Продажи**: search a partner by id or by part of the name and see
  their sales, newest first, with the total sum and a profit of 20 % of it.
- **Расчет материалов**: work out how much material a batch of products
  needs, from the product type coefficient, two size parameters and the
  material defect percentage. The result is rounded up to whole units.

## Installation

```
pip install .
```

The interface is built on tkinter, which ships with most Python
installations. There are no other dependencies.

## Running

```
partnerdesk
```

By default the application opens `./test.db` in the current directory. A
different database file can be given with `--db`:

```
partnerdesk --db path/to/partners.db
```

The same entry point is available as `partnerdesk.app.main`, and the
window can be opened from code with `partnerdesk.app.App(db_path).run()`.

## The database

The database must already exist and hold the tables `Partners`,
`PartnerProducts`, `Products`, `ProductTypes` and `MaterialTypes`. The
package does not create or migrate the schema.

Some points to keep in mind:

- The partner list shows only partners that have at least one row in
  `PartnerProducts`; a newly added partner appears once it has sales.
- Editing a partner stores its type, name, director, phone and rating.
  Changes to the e-mail and legal address in the edit form are not saved.

## Using the storage layer directly

```python
from partnerdesk.storage import Database, PartnersNotFoundError

with Database("partners.db") as db:
    try:
        for partner in db.get_partners():
            print(partner.company_name, partner.discount)
    except PartnersNotFoundError:
        print("no partners yet")

    partner_id, name = db.find_partner("Ромашка")
    for sale in db.get_partner_sales(partner_id):
        print(sale.sale_date, sale.product_name, sale.total_sum)

    required = db.calculate_material("1", "2", 10, 2.5, 1.2)
```

`Database` raises `StorageError` when a query fails,
`PartnersNotFoundError` when no partners are found and
`PartnerNotFoundError` when a search matches nothing. Partners and sales
come back as the `Partner` and `PartnerSale` dataclasses from
`partnerdesk.models`.

Form logic that does not need a window is available on its own:
`partnerdesk.partners.validate_form` checks partner fields and raises
`FormError`, `partnerdesk.material.calculate_result` turns form input into
the result text, and `partnerdesk.sales.search_sales` looks up a partner
and its sales.

## Tests

```
pip install .[test]
pytest
```