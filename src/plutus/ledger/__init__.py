"""Transaction records, persistence and export."""
from .models import (
    Category,
    ExpenseCategory,
    IncomeCategory,
    Transaction,
    TransactionRecord,
    TransactionType,
)
from .preferences import PreferenceStore
from .store import TransactionStore

__all__ = [
    "Category",
    "ExpenseCategory",
    "IncomeCategory",
    "Transaction",
    "TransactionRecord",
    "TransactionType",
    "PreferenceStore",
    "TransactionStore",
]
