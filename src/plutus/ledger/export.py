"""CSV export and reset backups."""
import csv
import io
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

from .models import Transaction
from plutus.utils.logger import get_logger
from plutus.utils.exceptions import ExportError

logger = get_logger()

CSV_HEADER = ["ID", "Date", "Title", "Type", "Category", "Amount"]


class ExportPeriod(str, Enum):
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"


def render_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions in store order, one row each, under ``CSV_HEADER``."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for t in transactions:
        writer.writerow([
            t.id,
            t.date.isoformat(sep=" "),
            t.title,
            t.type.value,
            t.category.value,
            str(t.amount),
        ])
    return buffer.getvalue()


def filter_by_period(
    transactions: Iterable[Transaction], period: ExportPeriod, now: datetime
) -> List[Transaction]:
    """Return transactions in the current day, ISO week, month or year of ``now``."""
    period = ExportPeriod(period)
    today = now.date()

    if period is ExportPeriod.DAY:
        return [t for t in transactions if t.date.date() == today]
    if period is ExportPeriod.WEEK:
        monday = today - timedelta(days=today.weekday())
        return [t for t in transactions if t.date.date() >= monday]
    if period is ExportPeriod.MONTH:
        return [
            t for t in transactions
            if (t.date.year, t.date.month) == (today.year, today.month)
        ]
    return [t for t in transactions if t.date.year == today.year]


def export_period(
    transactions: Iterable[Transaction],
    period: ExportPeriod,
    exports_dir: Path,
    now: datetime,
) -> Optional[Path]:
    """
    Write the period's transactions to ``dd-MM-yyyy_<Period>.csv``.

    Returns:
        Path of the written file, or None when the period has no transactions
    """
    period = ExportPeriod(period)
    selected = filter_by_period(transactions, period, now)
    if not selected:
        logger.info(f"No transactions to export for period {period.value}")
        return None

    path = Path(exports_dir) / f"{now:%d-%m-%Y}_{period.value}.csv"
    _write(path, selected, "Error saving file")
    logger.info(f"Exported {len(selected)} transactions to {path}")
    return path


def write_backup(transactions: Iterable[Transaction], exports_dir: Path, now: datetime) -> Optional[Path]:
    """Full backup written before a reset, named ``dd-MM-yy-reset.csv``."""
    transactions = list(transactions)
    if not transactions:
        return None

    path = Path(exports_dir) / f"{now:%d-%m-%y}-reset.csv"
    _write(path, transactions, "Error creating backup")
    logger.info(f"Backed up {len(transactions)} transactions to {path}")
    return path


def _write(path: Path, transactions: List[Transaction], failure: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(render_csv(transactions))
    except OSError as e:
        logger.error(f"{failure}: {e}")
        raise ExportError(f"{failure}: {e}") from e
