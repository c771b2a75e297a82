"""In-memory transaction collection with write-through persistence."""
import json
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Tuple, Union

from pydantic import ValidationError as SchemaError

from .models import (
    Category,
    Transaction,
    TransactionRecord,
    TransactionType,
    parse_amount,
    parse_category,
    parse_type,
)
from .preferences import PreferenceStore, TRANSACTIONS_KEY
from plutus.utils.logger import get_logger
from plutus.utils.exceptions import StorageError, ValidationError

logger = get_logger()


class TransactionStore:
    """
    Ordered collection of transactions, most recent first.

    The store is the only owner of the list. Every mutation rewrites the
    full JSON array under the ``transactions`` preference key.
    """

    def __init__(
        self,
        preferences: PreferenceStore,
        clock: Callable[[], datetime] = datetime.now,
        fuzzy_threshold: int = 3,
    ):
        """
        Args:
            preferences: Key-value store used for persistence
            clock: Source of the current instant for ``id`` and ``date``
            fuzzy_threshold: Edit distance for category suggestions
        """
        self.preferences = preferences
        self.clock = clock
        self.fuzzy_threshold = fuzzy_threshold
        self._transactions: List[Transaction] = []

    def load(self) -> Tuple[Transaction, ...]:
        """
        Replace the in-memory list with the persisted one.

        Raises:
            StorageError: if the persisted value is not a valid transaction list.
                The stored value is left untouched.
        """
        raw = self.preferences.get_string(TRANSACTIONS_KEY)
        if raw is None:
            self._transactions = []
            return self.all()

        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f"expected a JSON array, got {type(items).__name__}")
            loaded = [TransactionRecord.model_validate(item).to_transaction() for item in items]
        except (ValueError, SchemaError, ValidationError) as e:
            logger.error(f"Failed to load persisted transactions: {e}")
            raise StorageError(f"Persisted '{TRANSACTIONS_KEY}' entry is corrupted: {e}") from e

        self._transactions = loaded
        logger.info(f"Loaded {len(loaded)} transactions")
        return self.all()

    def add(
        self,
        title: str,
        amount: Union[str, int, float, Decimal],
        txn_type: Union[str, TransactionType],
        category: Union[str, Category],
    ) -> Transaction:
        """
        Validate and insert a new transaction at the front of the list.

        Raises:
            ValidationError: empty title or category, non-positive amount,
                or a category outside the type's list. The store is unchanged.
        """
        title = (title or "").strip()
        if not title:
            raise ValidationError("Please fill in all fields")
        txn_type = parse_type(txn_type)
        resolved_category = parse_category(txn_type, category, self.fuzzy_threshold)
        parsed_amount = parse_amount(amount)

        now = self.clock()
        transaction = Transaction(
            id=self._next_id(now),
            title=title,
            amount=parsed_amount,
            type=txn_type,
            category=resolved_category,
            date=now,
        )

        self._transactions.insert(0, transaction)
        self._persist()
        logger.info(
            f"Added {transaction.type.value} {transaction.id}: "
            f"{transaction.category.value} {transaction.amount}"
        )
        return transaction

    def all(self) -> Tuple[Transaction, ...]:
        """Snapshot of the current transactions in store order."""
        return tuple(self._transactions)

    def clear(self) -> int:
        """Remove every transaction. Returns how many were removed."""
        removed = len(self._transactions)
        self._transactions = []
        self._persist()
        logger.info(f"Cleared {removed} transactions")
        return removed

    def __len__(self) -> int:
        return len(self._transactions)

    def _next_id(self, now: datetime) -> str:
        """Millisecond timestamp, bumped until unique within the store."""
        existing = {t.id for t in self._transactions}
        candidate = int(now.timestamp() * 1000)
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    def _persist(self) -> None:
        payload = [t.to_record().model_dump(mode="json") for t in self._transactions]
        self.preferences.set_string(TRANSACTIONS_KEY, json.dumps(payload))
