"""Ledger record models for the bank statement and book (general ledger) feeds."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class BankRecord:
    """One row of the bank statement feed.

    Dates are kept as the raw ``D/M/Y`` strings found in the file; the matching
    key is ``invoice_number``.
    """

    account_no: str = ""
    transaction_date: str = ""
    time: str = ""
    invoice_number: str = ""
    product: str = ""
    total_amount: Decimal = Decimal("0")
    # Raw row, kept for display/audit only.
    original_row: Mapping[str, str] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class BookRecord:
    """One row of the book (general ledger) feed.

    ``description`` carries the matching key and is expected to mirror the bank
    invoice number.
    """

    document_no: str = ""
    posting_date: str = ""
    description: str = ""
    amount: Decimal = Decimal("0")
    original_row: Mapping[str, str] = field(default_factory=dict, compare=False, repr=False)
