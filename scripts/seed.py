# scripts/seed.py
"""
Load placeholder customers and invoices from a CSV into the database.

Usage:
    python -m scripts.init_db
    python -m scripts.seed [path/to/invoices.csv]
"""

import csv
import logging
import sys
from datetime import date
from decimal import Decimal
from uuid import NAMESPACE_URL, uuid5

from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from dashboard.db.engine import get_engine
from dashboard.db.schema import customers, invoices
from dashboard.logging import configure_logging
from dashboard.models.invoices import to_cents

logger = logging.getLogger(__name__)

FILE_PATH = "data/invoices.csv"


# ---- Helpers ----

def parse_cents(value: str) -> int:
    """Whole currency units ("15.50") to minor units (1550)."""
    value = value.strip()
    if value == "":
        raise ValueError("amount is empty")
    return to_cents(Decimal(value))


def customer_id_for(email: str) -> str:
    # Stable per email so re-running the seed keeps invoice references valid.
    return str(uuid5(NAMESPACE_URL, "mailto:" + email.strip().lower()))


def invoice_id_for(row_number: int, email: str, invoice_date: date) -> str:
    return str(uuid5(NAMESPACE_URL, f"invoice:{email.strip().lower()}:{invoice_date}:{row_number}"))


def parse_seed_csv(file_path: str = FILE_PATH):
    customers_by_id = {}
    invoices_list = []

    n_rows = 0
    n_errors = 0
    error_examples = []

    with open(file_path, newline="") as f:
        reader = csv.DictReader(f)

        for row in reader:
            n_rows += 1

            try:
                email = row["CustomerEmail"].strip()
                customer_id = customer_id_for(email)

                if customer_id not in customers_by_id:
                    customers_by_id[customer_id] = {
                        "id": customer_id,
                        "name": row["CustomerName"].strip(),
                        "email": email,
                        "image_url": row["ImageUrl"].strip() if row.get("ImageUrl") else None,
                    }

                status = row["Status"].strip()
                if status not in ("pending", "paid"):
                    raise ValueError(f"unknown status {status!r}")

                amount = parse_cents(row["Amount"])
                if amount <= 0:
                    raise ValueError("amount must be greater than 0")

                invoice_date = date.fromisoformat(row["Date"].strip())

                invoices_list.append(
                    {
                        "id": invoice_id_for(n_rows, email, invoice_date),
                        "customer_id": customer_id,
                        "amount": amount,
                        "status": status,
                        "date": invoice_date,
                    }
                )

            except Exception as e:
                n_errors += 1
                if len(error_examples) < 5:
                    error_examples.append(
                        {
                            "row_number": n_rows,
                            "error": repr(e),
                        }
                    )

    stats = {
        "n_rows": n_rows,
        "n_customers": len(customers_by_id),
        "n_invoices": len(invoices_list),
        "n_errors": n_errors,
        "error_examples": error_examples,
    }
    return list(customers_by_id.values()), invoices_list, stats


def upsert(conn, table, row: dict) -> None:
    """Insert a row, or overwrite every non-key column when its id exists."""
    stmt = sqlite_insert(table).values(**row)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.id],
        set_={name: stmt.excluded[name] for name in row if name != "id"},
    )
    conn.execute(stmt)


def load_into_db(engine, customers_list, invoices_list) -> None:
    with engine.begin() as conn:
        for customer in customers_list:
            upsert(conn, customers, customer)
        for invoice in invoices_list:
            upsert(conn, invoices, invoice)


def main(argv=None):
    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    file_path = args[0] if args else FILE_PATH

    customers_list, invoices_list, stats = parse_seed_csv(file_path)
    load_into_db(get_engine(), customers_list, invoices_list)

    logger.info(f"Total CSV rows read:   {stats['n_rows']}")
    logger.info(f"Unique customers:      {stats['n_customers']}")
    logger.info(f"Invoices parsed:       {stats['n_invoices']}")
    logger.info(f"Rows with errors:      {stats['n_errors']}")

    if stats["error_examples"]:
        logger.warning("Example errors:")
        for ex in stats["error_examples"]:
            logger.warning("Row %s: %s", ex["row_number"], ex["error"])


if __name__ == "__main__":
    main()
