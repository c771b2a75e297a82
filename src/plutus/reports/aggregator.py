"""Transaction aggregation: totals, category breakdown and time buckets."""
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from plutus.ledger.models import Transaction, TransactionType

ZERO = Decimal("0")


class Granularity(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


DEFAULT_WINDOWS = {
    Granularity.DAILY: 7,
    Granularity.WEEKLY: 4,
    Granularity.MONTHLY: 6,
}


@dataclass(frozen=True)
class Bucket:
    """Income and expense sums for the dates in ``[start, end)``."""
    label: str
    start: date
    end: date
    income: Decimal = ZERO
    expense: Decimal = ZERO

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


@dataclass(frozen=True)
class Summary:
    total_income: Decimal
    total_expense: Decimal
    net_balance: Decimal
    expense_by_category: Dict[str, Decimal]


def total_by_type(transactions: Iterable[Transaction], txn_type: TransactionType) -> Decimal:
    """Sum of amounts for ``txn_type``; 0 for no matches."""
    txn_type = TransactionType(txn_type)
    return sum((t.amount for t in transactions if t.type is txn_type), ZERO)


def net_balance(transactions: Sequence[Transaction]) -> Decimal:
    return (
        total_by_type(transactions, TransactionType.INCOME)
        - total_by_type(transactions, TransactionType.EXPENSE)
    )


def expense_by_category(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Expense totals keyed by category name, in first-seen order."""
    totals: Dict[str, Decimal] = {}
    for t in transactions:
        if not t.is_expense:
            continue
        name = t.category.value
        totals[name] = totals.get(name, ZERO) + t.amount
    return totals


def expense_share(transactions: Sequence[Transaction]) -> Dict[str, Decimal]:
    """
    Percentage of total expense per category.

    An empty expense total means there is no data to chart, so the result is
    an empty mapping rather than a ratio over zero.
    """
    by_category = expense_by_category(transactions)
    total = sum(by_category.values(), ZERO)
    if total == ZERO:
        return {}
    return {name: amount / total * 100 for name, amount in by_category.items()}


def summarize(transactions: Sequence[Transaction]) -> Summary:
    income = total_by_type(transactions, TransactionType.INCOME)
    expense = total_by_type(transactions, TransactionType.EXPENSE)
    return Summary(
        total_income=income,
        total_expense=expense,
        net_balance=income - expense,
        expense_by_category=expense_by_category(transactions),
    )


def bucket_by(
    transactions: Iterable[Transaction],
    granularity: Granularity,
    now: datetime,
    window_size: Optional[int] = None,
) -> List[Bucket]:
    """
    Split income and expense into consecutive periods ending with the one
    containing ``now``.

    Args:
        transactions: Transactions to distribute
        granularity: daily (calendar days), weekly (Monday-start weeks)
            or monthly (calendar months)
        now: Reference instant; the newest bucket contains it
        window_size: Number of buckets; defaults to 7, 4 and 6

    Returns:
        Exactly ``window_size`` buckets, oldest first. Transactions outside
        every bucket are ignored.
    """
    granularity = Granularity(granularity)
    if window_size is None:
        window_size = DEFAULT_WINDOWS[granularity]
    if window_size < 1:
        raise ValueError("window_size must be at least 1")

    buckets = [
        Bucket(label=label, start=start, end=end)
        for label, start, end in _bucket_ranges(granularity, now.date(), window_size)
    ]
    sums = [[ZERO, ZERO] for _ in buckets]

    for t in transactions:
        day = t.date.date()
        for index, bucket in enumerate(buckets):
            if bucket.contains(day):
                sums[index][0 if t.is_income else 1] += t.amount
                break

    return [
        replace(bucket, income=income, expense=expense)
        for bucket, (income, expense) in zip(buckets, sums)
    ]


def _bucket_ranges(granularity: Granularity, today: date, size: int) -> List[Tuple[str, date, date]]:
    ranges = []
    if granularity is Granularity.DAILY:
        for i in range(size - 1, -1, -1):
            day = today - timedelta(days=i)
            ranges.append((f"{day:%b %d}", day, day + timedelta(days=1)))
    elif granularity is Granularity.WEEKLY:
        this_monday = today - timedelta(days=today.weekday())
        for i in range(size - 1, -1, -1):
            monday = this_monday - timedelta(weeks=i)
            ranges.append((f"Week {size - i}", monday, monday + timedelta(weeks=1)))
    else:
        for i in range(size - 1, -1, -1):
            start = _add_months(today.replace(day=1), -i)
            ranges.append((f"{start:%b}", start, _add_months(start, 1)))
    return ranges


def _add_months(first_of_month: date, months: int) -> date:
    index = first_of_month.year * 12 + (first_of_month.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)
