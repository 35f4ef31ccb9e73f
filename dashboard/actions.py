# dashboard/actions.py
"""
Invoice mutations behind the dashboard's invoice forms.

Each operation validates the raw form fields, runs a single statement
against the engine it is handed, and on success marks the cached invoice
listing stale. Create and update then send the browser back to the listing;
delete does not, since the delete button lives on the listing itself.

Failures never raise past these functions. Bad input comes back as a
``FormState`` with per-field messages, and any database error comes back as
a ``FormState`` carrying a fixed message.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, List, Mapping, Optional, Protocol, Union

from pydantic import ValidationError
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from dashboard.db.schema import invoices
from dashboard.models.invoices import FormState, InvoiceFields

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"

FORM_FIELDS = ("customerId", "amount", "status")

FIELD_MESSAGES: Dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


class ViewInvalidator(Protocol):
    def invalidate(self, path: str) -> None:
        """Mark the cached view rendered at ``path`` as stale."""
        ...


@dataclass(frozen=True)
class Redirect:
    url: str


@dataclass(frozen=True)
class Valid:
    fields: InvoiceFields


@dataclass(frozen=True)
class Invalid:
    errors: Dict[str, List[str]]


ValidationResult = Union[Valid, Invalid]


# ---- Validation ----

def _validate(form: Mapping) -> ValidationResult:
    raw = {name: form.get(name) for name in FORM_FIELDS if form.get(name) is not None}
    try:
        return Valid(InvoiceFields.model_validate(raw))
    except ValidationError as exc:
        errors: Dict[str, List[str]] = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else ""
            message = FIELD_MESSAGES.get(field, err["msg"])
            messages = errors.setdefault(field, [])
            if message not in messages:
                messages.append(message)
        return Invalid(errors)


def validate_create(form: Mapping) -> ValidationResult:
    """Validate the fields of a new invoice; ``id`` and ``date`` are ignored."""
    return _validate(form)


def validate_update(form: Mapping) -> ValidationResult:
    """Validate the replaceable fields of an existing invoice."""
    return _validate(form)


def _today() -> date:
    return datetime.now(timezone.utc).date()


# ---- Mutations ----

def create_invoice(
    form: Mapping, *, engine: Engine, views: ViewInvalidator
) -> Union[FormState, Redirect]:
    result = validate_create(form)
    if isinstance(result, Invalid):
        logger.info("Rejected new invoice, invalid fields: %s", sorted(result.errors))
        return FormState(
            errors=result.errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    fields = result.fields
    stmt = insert(invoices).values(
        customer_id=fields.customer_id,
        amount=fields.amount_in_cents,
        status=fields.status,
        date=_today(),
    )

    try:
        with engine.begin() as conn:
            row = conn.execute(stmt)
    except SQLAlchemyError:
        logger.exception("Failed to insert invoice for customer %s", fields.customer_id)
        return FormState(message="Database Error: Failed to Create Invoice.")

    logger.info("Created invoice %s", row.inserted_primary_key[0])

    views.invalidate(INVOICES_PATH)
    return Redirect(INVOICES_PATH)


def update_invoice(
    invoice_id: str, form: Mapping, *, engine: Engine, views: ViewInvalidator
) -> Union[FormState, Redirect]:
    result = validate_update(form)
    if isinstance(result, Invalid):
        logger.info(
            "Rejected update of invoice %s, invalid fields: %s",
            invoice_id,
            sorted(result.errors),
        )
        return FormState(
            errors=result.errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    fields = result.fields
    # An unknown id matches no rows and still counts as success.
    stmt = (
        update(invoices)
        .where(invoices.c.id == invoice_id)
        .values(
            customer_id=fields.customer_id,
            amount=fields.amount_in_cents,
            status=fields.status,
        )
    )

    try:
        with engine.begin() as conn:
            conn.execute(stmt)
    except SQLAlchemyError:
        logger.exception("Failed to update invoice %s", invoice_id)
        return FormState(message="Database Error: Failed to Update Invoice.")

    logger.info("Updated invoice %s", invoice_id)

    views.invalidate(INVOICES_PATH)
    return Redirect(INVOICES_PATH)


def delete_invoice(
    invoice_id: str, *, engine: Engine, views: ViewInvalidator
) -> Optional[FormState]:
    stmt = delete(invoices).where(invoices.c.id == invoice_id)

    try:
        with engine.begin() as conn:
            conn.execute(stmt)
    except SQLAlchemyError:
        logger.exception("Failed to delete invoice %s", invoice_id)
        return FormState(message="Database Error: Failed to Delete Invoice.")

    logger.info("Deleted invoice %s", invoice_id)

    views.invalidate(INVOICES_PATH)
    return None
