"""Shared fixtures for the test suite."""
from datetime import datetime
from decimal import Decimal

from plutus.ledger.models import (
    ExpenseCategory,
    IncomeCategory,
    Transaction,
    TransactionType,
    parse_category,
)

_counter = [0]


def make_transaction(**kwargs) -> Transaction:
    """Build a transaction; ``type`` and ``category`` may be given as strings."""
    _counter[0] += 1
    txn_type = TransactionType(kwargs.pop("type", TransactionType.EXPENSE))
    category = kwargs.pop(
        "category",
        ExpenseCategory.OTHER if txn_type is TransactionType.EXPENSE else IncomeCategory.OTHER,
    )
    base = dict(
        id=str(_counter[0]),
        title="Item",
        amount=Decimal("10"),
        type=txn_type,
        category=parse_category(txn_type, category),
        date=datetime(2025, 5, 15, 12, 0),
    )
    base.update(kwargs)
    if not isinstance(base["amount"], Decimal):
        base["amount"] = Decimal(str(base["amount"]))
    return Transaction(**base)


def example_set():
    """Scholarship income with two grocery expenses."""
    return [
        make_transaction(type="Income", amount=1000, category="Scholarship", title="Grant"),
        make_transaction(type="Expense", amount=200, category="Food/Groceries", title="Market"),
        make_transaction(type="Expense", amount=50, category="Food/Groceries", title="Snacks"),
    ]
