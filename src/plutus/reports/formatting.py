"""Plain-text tables for summaries, charts and transaction lists."""
from decimal import Decimal
from typing import Iterable, Sequence

from plutus.ledger.models import Transaction
from .aggregator import Bucket, Summary


def format_money(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def _column_widths(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Sequence[int]:
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    return widths


def _format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = _column_widths(headers, rows)

    def format_row(row: Sequence[str]) -> str:
        return " | ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(row))

    lines = [format_row(headers), "-+-".join("-" * w for w in widths)]
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def format_summary(summary: Summary, shares: dict) -> str:
    header_lines = [
        f"Net Balance: {format_money(summary.net_balance)}",
        f"Total Income: {format_money(summary.total_income)}",
        f"Total Expenses: {format_money(summary.total_expense)}",
    ]
    if not summary.expense_by_category:
        return "\n".join(header_lines + ["", "No expenses recorded yet."])

    rows = [
        [name, format_money(amount), f"{shares.get(name, Decimal('0')):.1f}%"]
        for name, amount in summary.expense_by_category.items()
    ]
    table = _format_table(["Category", "Spent", "Share"], rows)
    return "\n".join(header_lines + ["", table])


def format_buckets(buckets: Iterable[Bucket]) -> str:
    rows = [
        [bucket.label, format_money(bucket.income), format_money(bucket.expense)]
        for bucket in buckets
    ]
    return _format_table(["Period", "Income", "Expense"], rows)


def format_transactions(transactions: Sequence[Transaction]) -> str:
    if not transactions:
        return "No transactions yet."
    rows = [
        [
            t.title,
            f"{t.category.value} • {t.date:%b} {t.date.day}",
            f"{'+' if t.is_income else '-'}{format_money(t.amount)}",
        ]
        for t in transactions
    ]
    return _format_table(["Title", "Category", "Amount"], rows)
