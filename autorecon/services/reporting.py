"""Summary statistics and filtering over reconciliation outcomes."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from autorecon.models import BankRecord, BookRecord, MatchStatus, ReconciliationOutcome
from autorecon.services.reconciliation import DEFAULT_CONFIG

_MISMATCH_STATUSES = (MatchStatus.AMOUNT_MISMATCH, MatchStatus.DATE_MISMATCH)


@dataclass(frozen=True)
class SummaryStats:
    """Dashboard figures for one reconciliation run."""

    total_bank: int
    total_book: int
    matched_count: int
    mismatch_count: int
    missing_in_book_count: int
    missing_in_bank_count: int
    unmatched_count: int
    # Share of outcomes that matched cleanly, 0-100. Not a monetary value.
    accuracy: float


def count_by_status(outcomes: Iterable[ReconciliationOutcome]) -> dict[MatchStatus, int]:
    """Count outcomes per status; statuses that never occur report zero."""
    counts = Counter(outcome.status for outcome in outcomes)
    return {status: counts.get(status, 0) for status in MatchStatus}


def summarize(
    bank_records: Sequence[BankRecord],
    book_records: Sequence[BookRecord],
    outcomes: Sequence[ReconciliationOutcome],
) -> SummaryStats:
    counts = count_by_status(outcomes)
    matched = counts[MatchStatus.MATCHED]
    missing_in_book = counts[MatchStatus.MISSING_IN_BOOK]
    missing_in_bank = counts[MatchStatus.MISSING_IN_BANK]
    accuracy = (matched / len(outcomes)) * 100 if outcomes else 0.0

    return SummaryStats(
        total_bank=len(bank_records),
        total_book=len(book_records),
        matched_count=matched,
        mismatch_count=sum(counts[status] for status in _MISMATCH_STATUSES),
        missing_in_book_count=missing_in_book,
        missing_in_bank_count=missing_in_bank,
        unmatched_count=missing_in_book + missing_in_bank,
        accuracy=accuracy,
    )


def has_amount_difference(
    outcome: ReconciliationOutcome,
    tolerance: Decimal = DEFAULT_CONFIG.amount_tolerance,
) -> bool:
    """Return True if the difference is large enough to show; smaller ones display as none."""
    return abs(outcome.amount_diff) >= tolerance


def _display_amount(value: Decimal) -> str:
    """Render an amount the way a spreadsheet cell shows it: ``1000.00`` as ``1000``."""
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def _matches_search(outcome: ReconciliationOutcome, needle: str) -> bool:
    bank = outcome.bank
    book = outcome.book
    haystack: list[str] = []
    if bank is not None:
        haystack.extend([bank.invoice_number, _display_amount(bank.total_amount)])
    if book is not None:
        haystack.extend([book.description, _display_amount(book.amount)])
    return any(needle in value.lower() for value in haystack)


def filter_outcomes(
    outcomes: Iterable[ReconciliationOutcome],
    status: MatchStatus | None = None,
    search: str = "",
) -> list[ReconciliationOutcome]:
    """Filter by status and a case-insensitive search over invoice numbers and amounts.

    The search text is used as typed, surrounding spaces included. Amounts are
    searched without trailing zeros, so ``"1000"`` finds ``1000.00`` but
    ``"1000.0"`` does not.
    """
    needle = search.lower()
    return [
        outcome
        for outcome in outcomes
        if (status is None or outcome.status == status)
        and (not needle or _matches_search(outcome, needle))
    ]
