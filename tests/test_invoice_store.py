from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from lexdesk.core.errors import DuplicateKey, NotFound, StoreUnavailable
from lexdesk.models.invoice import Invoice
from lexdesk.services.invoice_store import InvoiceStore


class FailingSession:
    def __init__(self, exc):
        self.exc = exc
        self.rolled_back = False

    def add(self, obj):
        pass

    def commit(self):
        raise self.exc

    def get(self, model, pk):
        raise self.exc

    def rollback(self):
        self.rolled_back = True


def test_driver_failure_becomes_store_unavailable():
    session = FailingSession(OperationalError("SELECT 1", {}, Exception("connection refused")))
    store = InvoiceStore(session)
    with pytest.raises(StoreUnavailable) as excinfo:
        store.save_invoice(Invoice())
    assert session.rolled_back
    assert excinfo.value.message == "Storage is temporarily unavailable"
    assert "connection refused" not in str(excinfo.value)


def test_integrity_error_becomes_duplicate_key():
    session = FailingSession(IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")))
    with pytest.raises(DuplicateKey):
        InvoiceStore(session).save_invoice(Invoice())
    assert session.rolled_back


def test_lookup_failure_is_translated():
    session = FailingSession(OperationalError("SELECT", {}, Exception("timeout")))
    with pytest.raises(StoreUnavailable):
        InvoiceStore(session).find_case_by_id(1)


def test_deleting_missing_invoice_is_not_found(db):
    with pytest.raises(NotFound):
        InvoiceStore(db).delete_invoice(31337)
