"""Aggregation and reporting."""
from .aggregator import (
    Bucket,
    Granularity,
    Summary,
    bucket_by,
    expense_by_category,
    expense_share,
    net_balance,
    summarize,
    total_by_type,
)

__all__ = [
    "Bucket",
    "Granularity",
    "Summary",
    "bucket_by",
    "expense_by_category",
    "expense_share",
    "net_balance",
    "summarize",
    "total_by_type",
]
