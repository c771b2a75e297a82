"""Financial context prompt for the advisor."""
from typing import Sequence

from plutus.ledger.models import Transaction
from plutus.reports.aggregator import summarize

SYSTEM_INSTRUCTION = (
    "You are a supportive and knowledgeable financial advisor specialized in student "
    "budgeting. Provide constructive, actionable, and personalized advice based on the "
    "user's current financial data. Keep the response concise (under 200 words)."
)


def build_prompt(transactions: Sequence[Transaction], question: str) -> str:
    """Summarize totals and the expense breakdown, then append the user's question."""
    summary = summarize(transactions)
    breakdown = ", ".join(
        f"{name}: ${amount:.2f}" for name, amount in summary.expense_by_category.items()
    )
    return (
        "Context:\n"
        f"Total Income: ${summary.total_income:.2f}\n"
        f"Total Expenses: ${summary.total_expense:.2f}\n"
        f"Net Balance: ${summary.net_balance:.2f}\n"
        f"Expense Breakdown: {breakdown}\n"
        "\n"
        f"User Question: {question}\n"
    )
