from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, List, Optional

from sqlalchemy import ColumnElement

from lexdesk.core.errors import InvalidReference, NotFound, ValidationFailure
from lexdesk.core.observability import record_invoice_event
from lexdesk.models.enums import InvoiceStatus
from lexdesk.models.invoice import Invoice, InvoiceExpense
from lexdesk.schemas.invoice import InvoiceUpdate
from lexdesk.services.invoice_store import InvoiceStore
from lexdesk.services.money import compute_totals, validate_expenses


logger = logging.getLogger(__name__)

# Paid invoices may be reopened as Outstanding but never regress to Draft.
ALLOWED_TRANSITIONS: Dict[InvoiceStatus, FrozenSet[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.DRAFT, InvoiceStatus.OUTSTANDING, InvoiceStatus.PAID}),
    InvoiceStatus.OUTSTANDING: frozenset({InvoiceStatus.DRAFT, InvoiceStatus.OUTSTANDING, InvoiceStatus.PAID}),
    InvoiceStatus.PAID: frozenset({InvoiceStatus.OUTSTANDING, InvoiceStatus.PAID}),
}


def parse_status(value: str) -> InvoiceStatus:
    try:
        return InvoiceStatus(value)
    except ValueError as exc:
        raise ValidationFailure(f"Unrecognised invoice status '{value}'") from exc


def ensure_transition(current: str, target: InvoiceStatus) -> None:
    try:
        current_status = InvoiceStatus(current)
    except ValueError:
        # Legacy statuses carry no transition rules.
        return
    if target not in ALLOWED_TRANSITIONS[current_status]:
        raise ValidationFailure(f"Invoice cannot move from {current_status.value} to {target.value}")


def build_expenses(expenses_payload: Iterable[dict]) -> List[InvoiceExpense]:
    return [
        InvoiceExpense(
            description=str(item["description"]).strip(),
            cost=Decimal(item["cost"]),
            quantity=item["quantity"],
            billable=item["billable"],
            order_index=idx,
        )
        for idx, item in enumerate(expenses_payload)
    ]


def apply_expenses(invoice: Invoice, expenses_payload: List[dict], *, tax_rate: Decimal) -> None:
    validate_expenses(expenses_payload)
    totals = compute_totals(expenses_payload, tax_rate)
    invoice.expenses = build_expenses(expenses_payload)
    invoice.subtotal = totals.subtotal
    invoice.tax = totals.tax
    invoice.total = totals.total


def create_invoice(
    store: InvoiceStore,
    *,
    case_id: int,
    owner_id: int,
    issue_date: date,
    expenses: Iterable[dict],
    now: datetime,
    tax_rate: Decimal,
) -> Invoice:
    expenses_payload = list(expenses)
    validate_expenses(expenses_payload)

    if store.find_case_by_id(case_id) is None:
        raise InvalidReference("Case", case_id)

    invoice = Invoice(
        case_id=case_id,
        owner_id=owner_id,
        issue_date=issue_date,
        status=InvoiceStatus.DRAFT.value,
        created_at=now,
        updated_at=now,
    )
    apply_expenses(invoice, expenses_payload, tax_rate=tax_rate)
    store.save_invoice(invoice)

    logger.info(
        "invoice_created",
        extra={"invoice_id": invoice.id, "case_id": case_id, "user_id": owner_id, "total": str(invoice.total)},
    )
    record_invoice_event("created")
    return invoice


def update_invoice(
    store: InvoiceStore,
    invoice_id: int,
    patch: InvoiceUpdate,
    *,
    now: datetime,
    tax_rate: Decimal,
    scope: Optional[ColumnElement[bool]] = None,
) -> Invoice:
    changes = patch.model_dump(exclude_unset=True)
    new_status = changes.pop("status", None)
    expenses_payload = changes.pop("expenses", None)

    if expenses_payload is not None:
        validate_expenses(expenses_payload)
    target_status = parse_status(new_status) if new_status is not None else None

    invoice = store.find_invoice_by_id(invoice_id, scope)
    if invoice is None:
        raise NotFound("Invoice", invoice_id)

    if target_status is not None:
        ensure_transition(invoice.status, target_status)
        invoice.status = target_status.value

    for field, value in changes.items():
        setattr(invoice, field, value)

    if expenses_payload is not None:
        apply_expenses(invoice, expenses_payload, tax_rate=tax_rate)

    invoice.updated_at = now
    store.save_invoice(invoice)

    logger.info(
        "invoice_updated",
        extra={"invoice_id": invoice.id, "status": invoice.status, "fields": sorted(patch.model_fields_set)},
    )
    record_invoice_event("updated")
    return invoice


def delete_invoice(
    store: InvoiceStore,
    invoice_id: int,
    *,
    scope: Optional[ColumnElement[bool]] = None,
) -> None:
    if store.find_invoice_by_id(invoice_id, scope) is None:
        raise NotFound("Invoice", invoice_id)
    store.delete_invoice(invoice_id)
    logger.info("invoice_deleted", extra={"invoice_id": invoice_id})
    record_invoice_event("deleted")
