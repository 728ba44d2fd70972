from __future__ import annotations

import heapq
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List

from lexdesk.models.enums import InvoiceStatus
from lexdesk.models.invoice import Invoice
from lexdesk.schemas.invoice import ActivityEntry, InvoiceStats, StatusBucket


ZERO = Decimal("0.00")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def compute_stats(invoices: Iterable[Invoice]) -> InvoiceStats:
    """Fold the invoices once into portfolio totals.

    Drafts and any non-canonical status count towards ``total_invoiced``
    only; ``by_status`` buckets on the literal status string.
    """
    total_invoiced = ZERO
    total_paid = ZERO
    total_outstanding = ZERO
    buckets: dict[str, StatusBucket] = {}

    for invoice in invoices:
        amount = Decimal(invoice.total or ZERO)
        total_invoiced += amount
        if invoice.status == InvoiceStatus.PAID:
            total_paid += amount
        elif invoice.status == InvoiceStatus.OUTSTANDING:
            total_outstanding += amount

        bucket = buckets.get(invoice.status)
        if bucket is None:
            bucket = buckets[invoice.status] = StatusBucket()
        bucket.count += 1
        bucket.total += amount

    return InvoiceStats(
        total_invoiced=total_invoiced,
        total_paid=total_paid,
        total_outstanding=total_outstanding,
        by_status=buckets,
    )


def recent_activity(invoices: Iterable[Invoice], limit: int) -> List[ActivityEntry]:
    if limit <= 0:
        return []
    newest = heapq.nlargest(limit, invoices, key=lambda inv: (_as_utc(inv.created_at), inv.id))
    return [
        ActivityEntry(
            id=invoice.id,
            action=invoice.status,
            date=invoice.created_at,
            amount=invoice.total,
            case_id=invoice.case_id,
            owner_id=invoice.owner_id,
        )
        for invoice in newest
    ]
