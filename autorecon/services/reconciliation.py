"""Reconciliation matching engine.

Pairs bank statement records with book records by invoice number and classifies
every pairing or leftover record into a :class:`MatchStatus` with a note.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from autorecon.config import settings
from autorecon.logger import get_logger, log_timing
from autorecon.models import (
    BankOnly,
    BankRecord,
    BookOnly,
    BookRecord,
    MatchedPair,
    MatchStatus,
    ReconciliationOutcome,
)

logger = get_logger(__name__)

NOTE_NOT_IN_BOOK = "Invoice number not found in Book"
NOTE_DUPLICATE_INVOICE = "Duplicate invoice: every Book entry with this number is already matched"
NOTE_NOT_IN_BANK = "Invoice number not found in Bank"

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class ReconciliationConfig:
    """Runtime configuration for reconciliation matching."""

    amount_tolerance: Decimal


DEFAULT_CONFIG = ReconciliationConfig(amount_tolerance=Decimal("0.01"))


def load_reconciliation_config() -> ReconciliationConfig:
    """Build the matching configuration from application settings."""
    return ReconciliationConfig(amount_tolerance=settings.reconciliation_amount_tolerance)


def _leading_int(part: str) -> str:
    """Read the integer that ``part`` starts with, or ``"NaN"`` when there is none.

    Leading whitespace and a sign are allowed and trailing junk is ignored, so
    ``"09"`` gives ``"9"`` and ``"1a"`` gives ``"1"``. Only ASCII digits count.
    """
    match = _LEADING_INT.match(part)
    if match is None:
        return "NaN"
    return str(int(match.group(1)))


def normalize_date(value: str) -> str:
    """Strip zero padding from a ``D/M/Y`` date string.

    ``01/09/2025`` becomes ``1/9/2025``. The year is kept as written. Day and
    month are read leniently (see :func:`_leading_int`), so ``aa/bb/2025`` becomes
    ``NaN/NaN/2025``. Anything that is not three slash-separated parts is
    returned unchanged.
    """
    if not value:
        return value
    parts = value.split("/")
    if len(parts) != 3:
        return value
    return f"{_leading_int(parts[0])}/{_leading_int(parts[1])}/{parts[2]}"


def dates_match(a: str, b: str) -> bool:
    return normalize_date(a) == normalize_date(b)


def amounts_match(a: Decimal, b: Decimal, tolerance: Decimal) -> bool:
    return abs(a - b) < tolerance


def build_description_index(book_records: Sequence[BookRecord]) -> dict[str, list[int]]:
    """Map each trimmed book description to the indices that carry it, in input order.

    Blank descriptions are left out, so those records can only surface as
    missing-in-bank.
    """
    index: dict[str, list[int]] = {}
    for position, record in enumerate(book_records):
        key = (record.description or "").strip()
        if not key:
            continue
        index.setdefault(key, []).append(position)
    return index


def select_candidate(
    bank: BankRecord,
    candidates: Sequence[int],
    book_records: Sequence[BookRecord],
    used: frozenset[int],
    tolerance: Decimal,
) -> int | None:
    """Pick the book index to pair with ``bank``.

    Tiers are tried in order and each returns its first hit:
    amount and date agree, then amount agrees, then any unused candidate.
    """
    available = [i for i in candidates if i not in used]
    if not available:
        return None

    for i in available:
        book = book_records[i]
        if amounts_match(book.amount, bank.total_amount, tolerance) and dates_match(
            book.posting_date, bank.transaction_date
        ):
            return i

    for i in available:
        if amounts_match(book_records[i].amount, bank.total_amount, tolerance):
            return i

    return available[0]


def classify_pair(
    bank: BankRecord,
    book: BookRecord,
    tolerance: Decimal,
) -> tuple[MatchStatus, Decimal, str]:
    """Return status, signed amount difference and note for a paired record.

    An amount difference outranks a date difference.
    """
    amount_diff = bank.total_amount - book.amount
    if abs(amount_diff) >= tolerance:
        return MatchStatus.AMOUNT_MISMATCH, amount_diff, f"Amount differs by {amount_diff:,}"
    if not dates_match(bank.transaction_date, book.posting_date):
        return (
            MatchStatus.DATE_MISMATCH,
            amount_diff,
            f"Date differs: Bank {bank.transaction_date} vs Book {book.posting_date}",
        )
    return MatchStatus.MATCHED, amount_diff, ""


def _match_bank_record(
    bank_index: int,
    bank: BankRecord,
    book_records: Sequence[BookRecord],
    description_index: dict[str, list[int]],
    used: frozenset[int],
    tolerance: Decimal,
) -> tuple[ReconciliationOutcome, frozenset[int]]:
    key = (bank.invoice_number or "").strip()
    candidates = description_index.get(key, [])
    chosen = select_candidate(bank, candidates, book_records, used, tolerance)

    if chosen is None:
        note = NOTE_DUPLICATE_INVOICE if candidates else NOTE_NOT_IN_BOOK
        outcome = ReconciliationOutcome(
            id=f"missing-book-{bank_index}",
            records=BankOnly(bank=bank),
            status=MatchStatus.MISSING_IN_BOOK,
            amount_diff=bank.total_amount,
            note=note,
        )
        return outcome, used

    book = book_records[chosen]
    status, amount_diff, note = classify_pair(bank, book, tolerance)
    outcome = ReconciliationOutcome(
        id=f"match-{key}-{bank_index}",
        records=MatchedPair(bank=bank, book=book),
        status=status,
        amount_diff=amount_diff,
        note=note,
    )
    return outcome, used | {chosen}


def reconcile(
    bank_records: Sequence[BankRecord],
    book_records: Sequence[BookRecord],
    config: ReconciliationConfig = DEFAULT_CONFIG,
) -> list[ReconciliationOutcome]:
    """Reconcile the bank feed against the book feed.

    Bank-driven outcomes come first in bank order, followed by the book records
    nobody claimed, in book order. Every input record appears in exactly one
    outcome and each book record is paired at most once.
    """
    with log_timing(
        "reconcile",
        logger=logger,
        bank_records=len(bank_records),
        book_records=len(book_records),
    ) as timing:
        description_index = build_description_index(book_records)
        outcomes: list[ReconciliationOutcome] = []
        used: frozenset[int] = frozenset()

        for bank_index, bank in enumerate(bank_records):
            outcome, used = _match_bank_record(
                bank_index,
                bank,
                book_records,
                description_index,
                used,
                config.amount_tolerance,
            )
            outcomes.append(outcome)

        for book_index, book in enumerate(book_records):
            if book_index in used:
                continue
            outcomes.append(
                ReconciliationOutcome(
                    id=f"missing-bank-{book_index}",
                    records=BookOnly(book=book),
                    status=MatchStatus.MISSING_IN_BANK,
                    amount_diff=-book.amount,
                    note=NOTE_NOT_IN_BANK,
                )
            )

        timing["outcomes"] = len(outcomes)
        timing["paired"] = len(used)

    return outcomes
