from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, Query, status

from lexdesk.core.access import Identity, require_lawyer, resolve_invoice_filter
from lexdesk.core.deps import get_clock, get_current_identity, get_invoice_store
from lexdesk.core.errors import NotFound
from lexdesk.core.settings import settings
from lexdesk.schemas.invoice import ActivityEntry, InvoiceCreate, InvoiceRead, InvoiceStats, InvoiceUpdate
from lexdesk.services import invoices as invoice_service
from lexdesk.services.invoice_stats import compute_stats, recent_activity
from lexdesk.services.invoice_store import InvoiceStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post("", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
def create_invoice(
    invoice_in: InvoiceCreate,
    store: InvoiceStore = Depends(get_invoice_store),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> InvoiceRead:
    lawyer = require_lawyer(identity)
    now = clock()
    invoice = invoice_service.create_invoice(
        store,
        case_id=invoice_in.case_id,
        owner_id=lawyer.id,
        issue_date=invoice_in.issue_date or now.date(),
        expenses=[expense.model_dump() for expense in invoice_in.expenses],
        now=now,
        tax_rate=settings.invoice_tax_rate,
    )
    return InvoiceRead.model_validate(invoice)


@router.get("", response_model=List[InvoiceRead])
def list_invoices(
    store: InvoiceStore = Depends(get_invoice_store),
    identity: Identity = Depends(get_current_identity),
) -> List[InvoiceRead]:
    scope = resolve_invoice_filter(identity)
    return [InvoiceRead.model_validate(invoice) for invoice in store.find_invoices_by_filter(scope)]


@router.get("/stats", response_model=InvoiceStats)
def invoice_stats(
    store: InvoiceStore = Depends(get_invoice_store),
    identity: Identity = Depends(get_current_identity),
) -> InvoiceStats:
    scope = resolve_invoice_filter(identity)
    return compute_stats(store.iter_invoices(scope))


@router.get("/recent-activity", response_model=List[ActivityEntry])
def invoice_recent_activity(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    store: InvoiceStore = Depends(get_invoice_store),
    identity: Identity = Depends(get_current_identity),
) -> List[ActivityEntry]:
    scope = resolve_invoice_filter(identity)
    limit = limit or settings.recent_activity_limit
    return recent_activity(store.find_invoices_by_filter(scope, limit=limit), limit)


@router.get("/{invoice_id}", response_model=InvoiceRead)
def get_invoice(
    invoice_id: int,
    store: InvoiceStore = Depends(get_invoice_store),
    identity: Identity = Depends(get_current_identity),
) -> InvoiceRead:
    invoice = store.find_invoice_by_id(invoice_id, resolve_invoice_filter(identity))
    if invoice is None:
        raise NotFound("Invoice", invoice_id)
    return InvoiceRead.model_validate(invoice)


@router.api_route("/{invoice_id}", methods=["PATCH", "PUT"], response_model=InvoiceRead)
def update_invoice(
    invoice_id: int,
    invoice_update: InvoiceUpdate,
    store: InvoiceStore = Depends(get_invoice_store),
    identity: Identity = Depends(get_current_identity),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> InvoiceRead:
    scope = resolve_invoice_filter(require_lawyer(identity))
    invoice = invoice_service.update_invoice(
        store,
        invoice_id,
        invoice_update,
        now=clock(),
        tax_rate=settings.invoice_tax_rate,
        scope=scope,
    )
    return InvoiceRead.model_validate(invoice)


@router.delete("/{invoice_id}", response_model=dict)
def delete_invoice(
    invoice_id: int,
    store: InvoiceStore = Depends(get_invoice_store),
    identity: Identity = Depends(get_current_identity),
) -> dict:
    scope = resolve_invoice_filter(require_lawyer(identity))
    invoice_service.delete_invoice(store, invoice_id, scope=scope)
    return {"message": "Invoice deleted"}
