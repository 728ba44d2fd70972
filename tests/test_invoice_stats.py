from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

from lexdesk.services.invoice_stats import compute_stats, recent_activity

BASE = datetime(2026, 2, 1, 10, 0, tzinfo=timezone.utc)


def _invoice(invoice_id, status, total, minutes=0, naive=False):
    created = BASE + timedelta(minutes=minutes)
    if naive:
        created = created.replace(tzinfo=None)
    return SimpleNamespace(
        id=invoice_id,
        status=status,
        total=Decimal(total),
        created_at=created,
        case_id=1,
        owner_id=1,
    )


def test_portfolio_totals_by_status():
    stats = compute_stats(
        [
            _invoice(1, "Paid", "100.00"),
            _invoice(2, "Outstanding", "200.00"),
            _invoice(3, "Draft", "50.00"),
        ]
    )
    assert stats.total_invoiced == Decimal("350.00")
    assert stats.total_paid == Decimal("100.00")
    assert stats.total_outstanding == Decimal("200.00")
    assert stats.by_status["Draft"].count == 1
    assert stats.by_status["Outstanding"].total == Decimal("200.00")


def test_empty_scope_yields_zero_stats():
    stats = compute_stats([])
    assert stats.total_invoiced == stats.total_paid == stats.total_outstanding == Decimal("0")
    assert stats.by_status == {}


def test_unknown_status_counts_only_towards_invoiced():
    stats = compute_stats([_invoice(1, "Sent", "75.00"), _invoice(2, "Sent", "25.00")])
    assert stats.total_invoiced == Decimal("100.00")
    assert stats.total_paid == Decimal("0")
    assert stats.total_outstanding == Decimal("0")
    assert stats.by_status["Sent"].count == 2
    assert stats.by_status["Sent"].total == Decimal("100.00")


def test_stats_accept_a_one_shot_iterator():
    invoices = iter([_invoice(1, "Paid", "10.00"), _invoice(2, "Paid", "5.50")])
    assert compute_stats(invoices).total_paid == Decimal("15.50")


def test_recent_activity_is_newest_first_and_limited():
    invoices = [_invoice(i, "Draft", "10.00", minutes=i) for i in range(1, 8)]
    entries = recent_activity(invoices, 3)
    assert [e.id for e in entries] == [7, 6, 5]
    assert entries[0].action == "Draft"
    assert entries[0].amount == Decimal("10.00")


def test_recent_activity_breaks_ties_by_id_and_handles_naive_timestamps():
    invoices = [
        _invoice(1, "Paid", "1.00", minutes=5, naive=True),
        _invoice(2, "Paid", "1.00", minutes=5),
        _invoice(3, "Paid", "1.00", minutes=1, naive=True),
    ]
    assert [e.id for e in recent_activity(invoices, 5)] == [2, 1, 3]


def test_recent_activity_with_non_positive_limit_is_empty():
    assert recent_activity([_invoice(1, "Paid", "1.00")], 0) == []
