"""Command line entry point for Plutus."""
import sys
import argparse
from datetime import datetime
from typing import Callable, Iterable, Optional

from plutus.advisor.client import AdvisoryClient
from plutus.config.manager import Config, ConfigManager
from plutus.config.settings import get_settings
from plutus.ledger.export import ExportPeriod, export_period, write_backup
from plutus.ledger.models import TransactionType, parse_category
from plutus.ledger.preferences import PreferenceStore
from plutus.ledger.store import TransactionStore
from plutus.reports.aggregator import Granularity, bucket_by, expense_share, summarize
from plutus.reports.formatting import format_buckets, format_summary, format_transactions
from plutus.state import (
    AdviceFailed,
    AdviceReceived,
    AdviceRequested,
    AppState,
    ClearForm,
    DataLoaded,
    EditAmount,
    EditQuestion,
    EditTitle,
    SelectCategory,
    SelectGranularity,
    SelectType,
    form_to_draft,
    reduce,
)
from plutus.utils.logger import get_logger, set_action_context
from plutus.utils.exceptions import (
    ExportError,
    MissingCredentialError,
    PlutusError,
    StorageError,
    TransportError,
    ValidationError,
)

logger = get_logger()


class App:
    """Wires the stores, state and advisor together for one CLI invocation."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.settings = get_settings()
        self.clock = clock
        self.preferences = PreferenceStore(self.settings.database_path)
        self.store = TransactionStore(
            self.preferences, clock=clock, fuzzy_threshold=self.settings.category_fuzzy_threshold
        )
        self.config_manager = ConfigManager(self.preferences, self.settings.llm_model_name)
        self.state = AppState()

    def dispatch(self, action) -> AppState:
        self.state = reduce(self.state, action)
        return self.state

    def load(self) -> None:
        self.store.load()
        self.dispatch(DataLoaded())


def add_command(app: App, args: argparse.Namespace) -> int:
    txn_type = TransactionType(args.type)
    app.dispatch(SelectType(txn_type))
    app.dispatch(SelectCategory(
        parse_category(txn_type, args.category, app.settings.category_fuzzy_threshold)
    ))
    app.dispatch(EditTitle(args.title))
    app.dispatch(EditAmount(args.amount))

    transaction = app.store.add(*form_to_draft(app.state))
    app.dispatch(ClearForm())
    print(f"Transaction added successfully! ({transaction.id})")
    return 0


def list_command(app: App, args: argparse.Namespace) -> int:
    transactions = app.store.all()
    if args.limit is not None:
        transactions = transactions[:args.limit]
    print(format_transactions(transactions))
    return 0


def summary_command(app: App, args: argparse.Namespace) -> int:
    transactions = app.store.all()
    print(format_summary(summarize(transactions), expense_share(transactions)))
    return 0


def chart_command(app: App, args: argparse.Namespace) -> int:
    state = app.dispatch(SelectGranularity(Granularity(args.granularity)))
    windows = {
        Granularity.DAILY: app.settings.daily_window,
        Granularity.WEEKLY: app.settings.weekly_window,
        Granularity.MONTHLY: app.settings.monthly_window,
    }
    buckets = bucket_by(app.store.all(), state.granularity, app.clock(), windows[state.granularity])
    print(format_buckets(buckets))
    return 0


def export_command(app: App, args: argparse.Namespace) -> int:
    path = export_period(
        app.store.all(), ExportPeriod(args.period), app.settings.exports_path, app.clock()
    )
    if path is None:
        print("No transactions found for this period.")
        return 0
    print(f"Saved to {path}")
    return 0


def reset_command(app: App, args: argparse.Namespace) -> int:
    if not args.yes:
        print(
            "This will backup all your transactions to a CSV file and then wipe all data. "
            "Re-run with --yes to confirm."
        )
        return 1

    try:
        backup = write_backup(app.store.all(), app.settings.exports_path, app.clock())
    except ExportError as e:
        raise ExportError(f"{e}. Reset aborted, no transactions were removed.") from e
    if backup is not None:
        print(f"Backup saved to {backup}")
    removed = app.store.clear()
    print(f"Removed {removed} transactions.")
    return 0


def set_key_command(app: App, args: argparse.Namespace) -> int:
    if args.clear:
        if app.config_manager.clear_config():
            print("API key removed.")
        else:
            print("No API key was set.")
        return 0
    if args.key is None:
        raise ValidationError("Provide an API key or use --clear")

    config = Config(gemini_api_key=args.key, model_name=app.config_manager.model_name)
    is_valid, message = app.config_manager.validate_config(config)
    if not is_valid:
        raise ValidationError(message)
    app.config_manager.save_config(config)
    print("API key saved.")
    return 0


def advise_command(app: App, args: argparse.Namespace) -> int:
    config = app.config_manager.load_config()
    client = AdvisoryClient(model_name=config.model_name)

    app.dispatch(EditQuestion(args.question))
    app.dispatch(AdviceRequested())
    try:
        advice = client.advise(app.store.all(), app.state.question, config.gemini_api_key)
    except TransportError as e:
        print(app.dispatch(AdviceFailed(str(e))).advice)
        return 1
    except (MissingCredentialError, ValidationError):
        app.dispatch(AdviceFailed("request not sent"))
        raise

    print(app.dispatch(AdviceReceived(advice)).advice)
    return 0


COMMANDS = {
    "add": add_command,
    "list": list_command,
    "summary": summary_command,
    "chart": chart_command,
    "export": export_command,
    "reset": reset_command,
    "set-key": set_key_command,
    "advise": advise_command,
}


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="plutus",
        description="Track student income and expenses and ask for budgeting advice."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Record a transaction")
    add.add_argument("title", help="Free-text label")
    add.add_argument("amount", help="Positive amount")
    add.add_argument(
        "--type",
        choices=[t.value for t in TransactionType],
        default=TransactionType.EXPENSE.value,
        help="Transaction type (default: Expense)"
    )
    add.add_argument("--category", required=True, help="Category for the chosen type")

    list_parser = subparsers.add_parser("list", help="Show recent transactions")
    list_parser.add_argument("--limit", type=positive_int, help="Show at most this many")

    subparsers.add_parser("summary", help="Show totals and expense breakdown")

    chart = subparsers.add_parser("chart", help="Show income and expense per period")
    chart.add_argument(
        "--granularity",
        choices=[g.value for g in Granularity],
        default=Granularity.DAILY.value,
    )

    export = subparsers.add_parser("export", help="Export transactions to CSV")
    export.add_argument(
        "--period",
        choices=[p.value for p in ExportPeriod],
        default=ExportPeriod.MONTH.value,
    )

    reset = subparsers.add_parser("reset", help="Backup to CSV and delete all transactions")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")

    set_key = subparsers.add_parser("set-key", help="Save the Gemini API key")
    set_key.add_argument("key", nargs="?", help="Gemini API key")
    set_key.add_argument("--clear", action="store_true", help="Remove the saved API key")

    advise = subparsers.add_parser("advise", help="Ask for budgeting advice")
    advise.add_argument("question")

    return parser.parse_args(argv)


def run(argv: Optional[Iterable[str]] = None, clock: Callable[[], datetime] = datetime.now) -> int:
    args = parse_args(argv)
    set_action_context(args.command)

    try:
        app = App(clock=clock)
        app.load()
        return COMMANDS[args.command](app, args)
    except StorageError as e:
        logger.critical(f"Cannot start: {e}")
        return 1
    except PlutusError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        set_action_context(None)


def main():
    """Main entry point for the plutus command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
