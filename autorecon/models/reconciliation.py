"""Reconciliation outcome models."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from autorecon.models.ledger import BankRecord, BookRecord


class MatchStatus(str, Enum):
    """Classification of a pairing or non-pairing."""

    MATCHED = "matched"
    AMOUNT_MISMATCH = "amount_mismatch"
    DATE_MISMATCH = "date_mismatch"
    MISSING_IN_BOOK = "missing_in_book"
    MISSING_IN_BANK = "missing_in_bank"


@dataclass(frozen=True)
class BankOnly:
    """A bank record with no book counterpart."""

    bank: BankRecord


@dataclass(frozen=True)
class BookOnly:
    """A book record left over after every bank record was processed."""

    book: BookRecord


@dataclass(frozen=True)
class MatchedPair:
    """A bank record paired with the book record it consumed."""

    bank: BankRecord
    book: BookRecord


RecordRef = BankOnly | BookOnly | MatchedPair


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Result for one pairing or one unmatched record."""

    id: str
    records: RecordRef
    status: MatchStatus
    amount_diff: Decimal
    note: str = ""

    @property
    def bank(self) -> BankRecord | None:
        if isinstance(self.records, BookOnly):
            return None
        return self.records.bank

    @property
    def book(self) -> BookRecord | None:
        if isinstance(self.records, BankOnly):
            return None
        return self.records.book
