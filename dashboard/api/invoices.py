# dashboard/api/invoices.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy import select
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from dashboard.actions import (
    INVOICES_PATH,
    Redirect,
    create_invoice,
    delete_invoice,
    update_invoice,
)
from dashboard.cache import PageCache, get_page_cache
from dashboard.db.engine import get_engine
from dashboard.db.schema import customers, invoices
from dashboard.models.invoices import (
    InvoiceListItem,
    InvoiceListResponse,
    InvoiceOut,
)

router = APIRouter(prefix=INVOICES_PATH, tags=["invoices"])


def _render_listing(engine: Engine) -> InvoiceListResponse:
    with engine.connect() as conn:
        stmt = (
            select(
                invoices.c.id,
                invoices.c.customer_id,
                customers.c.name.label("customer_name"),
                customers.c.email.label("customer_email"),
                invoices.c.amount,
                invoices.c.status,
                invoices.c.date,
            )
            .select_from(invoices.outerjoin(customers))
            .order_by(invoices.c.date.desc(), invoices.c.id)
        )

        rows = conn.execute(stmt).mappings().all()

    items: List[InvoiceListItem] = [InvoiceListItem(**row) for row in rows]
    return InvoiceListResponse(items=items, total=len(items))


def _form_response(result) -> Response:
    if isinstance(result, Redirect):
        return RedirectResponse(result.url, status_code=303)
    # Field errors mean the user can fix the form; otherwise the store failed.
    status_code = 422 if result.errors else 500
    return JSONResponse(status_code=status_code, content=result.model_dump())


@router.get("", response_model=InvoiceListResponse)
def list_invoices(
    engine: Engine = Depends(get_engine),
    cache: PageCache = Depends(get_page_cache),
) -> InvoiceListResponse:
    """
    All invoices with their customer, newest first.

    Served from the page cache until a mutation invalidates it.
    """
    return cache.get_or_render(INVOICES_PATH, lambda: _render_listing(engine))


@router.get("/{invoice_id}", response_model=InvoiceOut)
def get_invoice(invoice_id: str, engine: Engine = Depends(get_engine)) -> InvoiceOut:
    """
    Look up a single invoice by id, e.g. to prefill the edit form.
    """
    with engine.connect() as conn:
        stmt = select(
            invoices.c.id,
            invoices.c.customer_id,
            invoices.c.amount,
            invoices.c.status,
            invoices.c.date,
        ).where(invoices.c.id == invoice_id)

        row = conn.execute(stmt).mappings().first()

    if row is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return InvoiceOut(**row)


@router.post("/create")
async def create_invoice_form(
    request: Request,
    engine: Engine = Depends(get_engine),
    cache: PageCache = Depends(get_page_cache),
) -> Response:
    form = await request.form()
    result = await run_in_threadpool(create_invoice, form, engine=engine, views=cache)
    return _form_response(result)


@router.post("/{invoice_id}/edit")
async def update_invoice_form(
    invoice_id: str,
    request: Request,
    engine: Engine = Depends(get_engine),
    cache: PageCache = Depends(get_page_cache),
) -> Response:
    form = await request.form()
    result = await run_in_threadpool(
        update_invoice, invoice_id, form, engine=engine, views=cache
    )
    return _form_response(result)


@router.post("/{invoice_id}/delete")
def delete_invoice_form(
    invoice_id: str,
    engine: Engine = Depends(get_engine),
    cache: PageCache = Depends(get_page_cache),
) -> Response:
    state = delete_invoice(invoice_id, engine=engine, views=cache)
    if state is not None:
        return JSONResponse(status_code=500, content=state.model_dump())
    return Response(status_code=204)
