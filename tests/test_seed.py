from sqlalchemy import create_engine, func, select

from dashboard.db.schema import customers, invoices, metadata
from scripts.seed import load_into_db, parse_cents, parse_seed_csv

CSV = """CustomerName,CustomerEmail,ImageUrl,Amount,Status,Date
Evil Rabbit,evil@rabbit.com,/customers/evil-rabbit.png,157.95,pending,2022-12-06
Evil Rabbit,evil@rabbit.com,/customers/evil-rabbit.png,6.66,paid,2023-06-07
Lee Robinson,lee@robinson.com,,30.40,paid,2022-10-29
Bad Row,bad@row.com,,0,paid,2022-10-29
Bad Status,bad@status.com,,10,overdue,2022-10-29
"""


def test_parse_cents():
    assert parse_cents("157.95") == 15795
    assert parse_cents(" 6.66 ") == 666
    assert parse_cents("0.005") == 1


def test_parse_seed_csv_collects_errors(tmp_path):
    path = tmp_path / "invoices.csv"
    path.write_text(CSV)

    customers_list, invoices_list, stats = parse_seed_csv(str(path))

    assert stats["n_rows"] == 5
    assert stats["n_invoices"] == 3
    assert stats["n_errors"] == 2
    # Customers seen on a rejected row are still collected.
    assert {c["email"] for c in customers_list} >= {"evil@rabbit.com", "lee@robinson.com"}
    assert [inv["amount"] for inv in invoices_list] == [15795, 666, 3040]


def test_load_is_idempotent(tmp_path):
    path = tmp_path / "invoices.csv"
    path.write_text(CSV)
    engine = create_engine(f"sqlite:///{tmp_path / 'seed.sqlite'}", future=True)
    metadata.create_all(engine)

    customers_list, invoices_list, _ = parse_seed_csv(str(path))
    load_into_db(engine, customers_list, invoices_list)
    load_into_db(engine, customers_list, invoices_list)

    with engine.connect() as conn:
        n_invoices = conn.execute(select(func.count()).select_from(invoices)).scalar_one()
        n_customers = conn.execute(select(func.count()).select_from(customers)).scalar_one()

    assert n_invoices == 3
    assert n_customers == len(customers_list)
