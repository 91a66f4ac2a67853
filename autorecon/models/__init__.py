"""Domain models package."""

from autorecon.models.ledger import BankRecord, BookRecord
from autorecon.models.reconciliation import (
    BankOnly,
    BookOnly,
    MatchedPair,
    MatchStatus,
    ReconciliationOutcome,
    RecordRef,
)

__all__ = [
    "BankOnly",
    "BankRecord",
    "BookOnly",
    "BookRecord",
    "MatchedPair",
    "MatchStatus",
    "ReconciliationOutcome",
    "RecordRef",
]
