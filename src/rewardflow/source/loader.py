"""Transaction feed loading and boundary validation."""
import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from rewardflow.rewards.calculator import attach_reward_points
from rewardflow.rewards.dates import parse_calendar_date
from rewardflow.rewards.models import Transaction
from rewardflow.utils import get_logger, SourceError

logger = get_logger()


class TransactionRecordSchema(BaseModel):
    """Pydantic schema for a raw feed record."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    customer_id: StrictInt = Field(alias="customerId", description="Stable customer identifier")
    name: str = Field(description="Customer display name")
    # Date and price are checked later: bad values must not drop the record here
    date: Any = Field(default=None, description="Transaction date, YYYY-MM-DD")
    price: Any = Field(default=None, description="Transaction amount")


def record_to_transaction(record: TransactionRecordSchema) -> Transaction:
    """Build a Transaction from a validated record, keeping unknown fields."""
    parsed_date = parse_calendar_date(record.date)
    return Transaction(
        customer_id=record.customer_id,
        name=record.name,
        date=parsed_date if parsed_date is not None else record.date,
        price=record.price,
        extra=dict(record.model_extra or {})
    )


def _date_sort_key(txn: Transaction) -> tuple:
    # Unparsable dates sort last
    if isinstance(txn.date, date):
        return (0, txn.date)
    return (1, date.min)


class TransactionLoader:
    """Loads the transaction feed from a JSON file."""

    def __init__(self, path: Path):
        """
        Initialize loader.

        Args:
            path: Path to a JSON array of transaction objects
        """
        self.path = Path(path)
        self.skipped_records = 0

    def load(self) -> List[Transaction]:
        """
        Load, validate and sort transactions, with reward points attached.

        Returns:
            Transactions sorted by date ascending

        Raises:
            SourceError: If the file cannot be read or is not a JSON array
        """
        raw_records = self._read_records()
        transactions = self.parse_records(raw_records)
        transactions.sort(key=_date_sort_key)

        logger.info(
            f"Loaded {len(transactions)} transactions from {self.path.name}"
            f" ({self.skipped_records} skipped)"
        )
        return attach_reward_points(transactions)

    def parse_records(self, raw_records: List[Any]) -> List[Transaction]:
        """Validate raw records, skipping those without a usable shape."""
        self.skipped_records = 0
        transactions = []

        for index, raw in enumerate(raw_records):
            try:
                record = TransactionRecordSchema.model_validate(raw)
            except ValidationError as e:
                self.skipped_records += 1
                logger.warning(
                    f"Invalid transaction record at index {index}, skipping: "
                    f"{e.error_count()} validation error(s)"
                )
                logger.debug(f"Record {index}: {raw!r}: {e}")
                continue

            transactions.append(record_to_transaction(record))

        return transactions

    def _read_records(self) -> List[Dict[str, Any]]:
        """Read the JSON array from disk."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            logger.error(f"Failed to read transactions from {self.path}: {e}")
            raise SourceError(f"Cannot read transactions file {self.path}: {e}")
        except ValueError as e:
            # JSONDecodeError, UnicodeDecodeError and oversized integer literals
            logger.error(f"Failed to parse transactions from {self.path}: {e}")
            raise SourceError(f"Invalid JSON in transactions file {self.path}: {e}")

        if not isinstance(data, list):
            raise SourceError(
                f"Transactions file {self.path} must contain a JSON array, "
                f"got {type(data).__name__}"
            )

        return data


def load_transactions(path: Path) -> List[Transaction]:
    """Load transactions with reward points from a JSON file."""
    return TransactionLoader(path).load()
