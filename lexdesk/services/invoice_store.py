"""Persistence boundary for the billing engine.

Every public method is a single unit of work against the session: it
either commits completely or rolls back and raises. Database failures are
translated into domain errors so callers never see driver text.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from sqlalchemy import ColumnElement, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from lexdesk.core.errors import DuplicateKey, NotFound, StoreUnavailable
from lexdesk.models.case import Case
from lexdesk.models.invoice import Invoice


logger = logging.getLogger(__name__)

STREAM_BATCH_SIZE = 500


class InvoiceStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _fail(self, exc: SQLAlchemyError) -> None:
        self.db.rollback()
        if isinstance(exc, IntegrityError):
            raise DuplicateKey("Record conflicts with an existing unique value") from exc
        logger.error("store_unavailable", extra={"error_type": type(exc).__name__})
        raise StoreUnavailable() from exc

    def find_case_by_id(self, case_id: int) -> Optional[Case]:
        try:
            return self.db.get(Case, case_id)
        except SQLAlchemyError as exc:
            self._fail(exc)

    def find_invoice_by_id(
        self,
        invoice_id: int,
        predicate: Optional[ColumnElement[bool]] = None,
    ) -> Optional[Invoice]:
        stmt = (
            select(Invoice)
            .options(selectinload(Invoice.expenses), selectinload(Invoice.case), selectinload(Invoice.owner))
            .where(Invoice.id == invoice_id)
        )
        if predicate is not None:
            stmt = stmt.where(predicate)
        try:
            return self.db.scalars(stmt).first()
        except SQLAlchemyError as exc:
            self._fail(exc)

    def find_invoices_by_filter(
        self,
        predicate: ColumnElement[bool],
        *,
        newest_first: bool = True,
        limit: Optional[int] = None,
    ) -> List[Invoice]:
        stmt = (
            select(Invoice)
            .options(selectinload(Invoice.expenses), selectinload(Invoice.case), selectinload(Invoice.owner))
            .where(predicate)
        )
        if newest_first:
            stmt = stmt.order_by(Invoice.created_at.desc(), Invoice.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as exc:
            self._fail(exc)

    def iter_invoices(self, predicate: ColumnElement[bool]) -> Iterator[Invoice]:
        """Stream scoped invoices in batches without loading the full set."""
        stmt = select(Invoice).where(predicate).execution_options(yield_per=STREAM_BATCH_SIZE)
        try:
            yield from self.db.scalars(stmt)
        except SQLAlchemyError as exc:
            self._fail(exc)

    def save_invoice(self, invoice: Invoice) -> Invoice:
        try:
            self.db.add(invoice)
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail(exc)
        return invoice

    def delete_invoice(self, invoice_id: int) -> None:
        try:
            invoice = self.db.get(Invoice, invoice_id)
        except SQLAlchemyError as exc:
            self._fail(exc)
        if invoice is None:
            raise NotFound("Invoice", invoice_id)
        try:
            self.db.delete(invoice)
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail(exc)
