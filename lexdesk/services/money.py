"""Invoice money arithmetic.

All amounts are ``Decimal`` and are quantized to cents with
``ROUND_HALF_UP``. A line's product (integer quantity times a two-place
cost) is exact, so the subtotal does not depend on line order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Protocol

from lexdesk.core.errors import ValidationFailure


TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


class ExpenseLike(Protocol):
    description: str
    cost: Decimal
    quantity: int
    billable: bool


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def _q(value: Decimal) -> Decimal:
    return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _field(expense: Any, name: str) -> Any:
    if isinstance(expense, dict):
        return expense.get(name)
    return getattr(expense, name, None)


def line_amount(expense: ExpenseLike | dict) -> Decimal:
    if not _field(expense, "billable"):
        return ZERO
    return Decimal(_field(expense, "cost")) * int(_field(expense, "quantity"))


def compute_totals(expenses: Iterable[ExpenseLike | dict], tax_rate: Decimal) -> InvoiceTotals:
    subtotal = _q(sum((line_amount(expense) for expense in expenses), start=ZERO))
    tax = _q(subtotal * Decimal(tax_rate))
    return InvoiceTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def validate_expenses(expenses: Iterable[ExpenseLike | dict]) -> None:
    for idx, expense in enumerate(expenses):
        description = _field(expense, "description")
        if not description or not str(description).strip():
            raise ValidationFailure(f"Expense {idx}: description is required")
        try:
            cost = Decimal(_field(expense, "cost"))
        except (TypeError, ArithmeticError, ValueError) as exc:
            raise ValidationFailure(f"Expense {idx}: cost must be a decimal amount") from exc
        if not cost.is_finite() or cost < ZERO:
            raise ValidationFailure(f"Expense {idx}: cost must not be negative")
        if cost != _q(cost):
            raise ValidationFailure(f"Expense {idx}: cost must not have more than two decimal places")
        quantity = _field(expense, "quantity")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 0:
            raise ValidationFailure(f"Expense {idx}: quantity must be a non-negative integer")
        if not isinstance(_field(expense, "billable"), bool):
            raise ValidationFailure(f"Expense {idx}: billable must be true or false")
