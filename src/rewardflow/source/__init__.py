"""Transaction feed source."""
from .loader import TransactionLoader, TransactionRecordSchema, load_transactions

__all__ = ["TransactionLoader", "TransactionRecordSchema", "load_transactions"]
