# dashboard/api/customers.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.engine import Engine

from dashboard.db.engine import get_engine
from dashboard.db.schema import customers
from dashboard.models.customers import CustomerOut

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/", response_model=List[CustomerOut])
def list_customers(engine: Engine = Depends(get_engine)) -> List[CustomerOut]:
    """
    Return all customers, for the customer picker on the invoice forms.
    """
    with engine.connect() as conn:
        stmt = (
            select(
                customers.c.id,
                customers.c.name,
                customers.c.email,
                customers.c.image_url,
            )
            .order_by(customers.c.name)
        )

        rows = conn.execute(stmt).mappings().all()

    return [
        CustomerOut(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            image_url=row["image_url"],
        )
        for row in rows
    ]
