"""Transaction data models."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Type, Union

import Levenshtein
from pydantic import BaseModel

from plutus.utils.exceptions import ValidationError


class TransactionType(str, Enum):
    """Direction of money flow."""
    INCOME = "Income"
    EXPENSE = "Expense"


class IncomeCategory(str, Enum):
    SCHOLARSHIP = "Scholarship"
    PARENTS = "Parents"
    PART_TIME_JOB = "Part-time Job"
    GIFTS = "Gifts"
    OTHER = "Other"


class ExpenseCategory(str, Enum):
    TUITION_FEES = "Tuition/Fees"
    RENT_HOUSING = "Rent/Housing"
    FOOD_GROCERIES = "Food/Groceries"
    BOOKS_SUPPLIES = "Books/Supplies"
    TRANSPORTATION = "Transportation"
    RELOAD = "Reload"
    SOCIAL_LEISURE = "Social/Leisure"
    SAVINGS = "Savings"
    OTHER = "Other"


Category = Union[IncomeCategory, ExpenseCategory]

CATEGORIES_BY_TYPE = {
    TransactionType.INCOME: IncomeCategory,
    TransactionType.EXPENSE: ExpenseCategory,
}


def category_enum(txn_type: TransactionType) -> Type[Enum]:
    """Return the closed category enumeration allowed for ``txn_type``."""
    return CATEGORIES_BY_TYPE[TransactionType(txn_type)]


def default_category(txn_type: TransactionType) -> Category:
    """First category of the type's list, used when the type changes."""
    return next(iter(category_enum(txn_type)))


def parse_type(value: Union[str, TransactionType]) -> TransactionType:
    if isinstance(value, TransactionType):
        return value
    normalized = (value or "").strip().lower()
    for member in TransactionType:
        if member.value.lower() == normalized:
            return member
    raise ValidationError(f"Unknown transaction type '{value}'. Use Income or Expense.")


def suggest_category(txn_type: TransactionType, name: str, fuzzy_threshold: int = 3) -> Optional[Category]:
    """Closest category of ``txn_type`` within ``fuzzy_threshold`` edits, if any."""
    normalized = name.strip().lower()
    best = None
    best_distance = fuzzy_threshold + 1
    for member in category_enum(txn_type):
        distance = Levenshtein.distance(normalized, member.value.lower())
        if distance < best_distance:
            best, best_distance = member, distance
    return best


def parse_category(
    txn_type: Union[str, TransactionType],
    value: Union[str, Category],
    fuzzy_threshold: int = 3,
) -> Category:
    """
    Resolve a category name against the list for ``txn_type``.

    Matching is case-insensitive. Near misses are rejected with a suggestion
    rather than silently corrected.

    Raises:
        ValidationError: empty name, or name not in the type's list
    """
    txn_type = parse_type(txn_type)
    enum_cls = category_enum(txn_type)

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, Enum):
        value = value.value

    name = (value or "").strip()
    if not name:
        raise ValidationError("Please fill in all fields")

    for member in enum_cls:
        if member.value.lower() == name.lower():
            return member

    message = f"Unknown {txn_type.value} category '{name}'."
    suggestion = suggest_category(txn_type, name, fuzzy_threshold)
    if suggestion is not None:
        message += f" Did you mean '{suggestion.value}'?"
    raise ValidationError(message)


def parse_amount(value: Union[str, int, float, Decimal]) -> Decimal:
    """Parse a user-entered amount; only finite positive values are accepted."""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Please enter a valid positive amount")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Please enter a valid positive amount")
    # Amounts are persisted as JSON numbers and must read back unchanged
    if Decimal(str(float(amount))) != amount:
        raise ValidationError(f"Amount {value} is too large or too precise to store")
    return amount


@dataclass(frozen=True)
class Transaction:
    """One recorded income or expense event. Immutable once created."""

    id: str
    title: str
    amount: Decimal
    type: TransactionType
    category: Category
    date: datetime

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValidationError("Please fill in all fields")
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite() or self.amount <= 0:
            raise ValidationError("Please enter a valid positive amount")
        if not isinstance(self.category, category_enum(self.type)):
            raise ValidationError(
                f"Category '{self.category}' is not a {self.type.value} category"
            )

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    def to_record(self) -> "TransactionRecord":
        return TransactionRecord(
            id=self.id,
            title=self.title,
            amount=float(self.amount),
            type=self.type,
            category=self.category.value,
            date=self.date,
        )


class TransactionRecord(BaseModel):
    """Persisted JSON shape of a transaction."""
    id: str
    title: str
    amount: float
    type: TransactionType
    category: str
    date: datetime

    def to_transaction(self) -> Transaction:
        return Transaction(
            id=self.id,
            title=self.title,
            amount=Decimal(str(self.amount)),
            type=self.type,
            category=parse_category(self.type, self.category),
            date=self.date,
        )
