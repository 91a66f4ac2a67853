"""Tests for reconciliation summary and filtering helpers."""

from decimal import Decimal

import pytest

from autorecon.models import MatchStatus
from autorecon.services.reconciliation import reconcile
from autorecon.services.reporting import (
    count_by_status,
    filter_outcomes,
    has_amount_difference,
    summarize,
)
from tests.factories import BankRecordFactory, BookRecordFactory


@pytest.fixture
def ledgers():
    banks = [
        BankRecordFactory.build(invoice_number="INV-A", total_amount=Decimal("100.00")),
        BankRecordFactory.build(invoice_number="INV-B", total_amount=Decimal("250.00")),
        BankRecordFactory.build(invoice_number="INV-C", total_amount=Decimal("40.00"), transaction_date="3/9/2025"),
        BankRecordFactory.build(invoice_number="INV-D", total_amount=Decimal("12.00")),
    ]
    books = [
        BookRecordFactory.build(description="INV-A", amount=Decimal("100.00")),
        BookRecordFactory.build(description="INV-B", amount=Decimal("200.00")),
        BookRecordFactory.build(description="INV-C", amount=Decimal("40.00")),
        BookRecordFactory.build(description="INV-Z", amount=Decimal("7.77")),
    ]
    return banks, books


def test_count_by_status_reports_every_status(ledgers) -> None:
    banks, books = ledgers

    counts = count_by_status(reconcile(banks, books))

    assert counts == {
        MatchStatus.MATCHED: 1,
        MatchStatus.AMOUNT_MISMATCH: 1,
        MatchStatus.DATE_MISMATCH: 1,
        MatchStatus.MISSING_IN_BOOK: 1,
        MatchStatus.MISSING_IN_BANK: 1,
    }


def test_summarize(ledgers) -> None:
    banks, books = ledgers

    stats = summarize(banks, books, reconcile(banks, books))

    assert stats.total_bank == 4
    assert stats.total_book == 4
    assert stats.matched_count == 1
    assert stats.mismatch_count == 2
    assert stats.missing_in_book_count == 1
    assert stats.missing_in_bank_count == 1
    assert stats.unmatched_count == 2
    assert stats.accuracy == pytest.approx(20.0)


def test_summarize_without_outcomes() -> None:
    stats = summarize([], [], [])

    assert stats.accuracy == 0.0
    assert stats.unmatched_count == 0


def test_has_amount_difference_uses_tolerance() -> None:
    book = BookRecordFactory.build(description="K", amount=Decimal("10.00"))
    near = reconcile([BankRecordFactory.build(invoice_number="K", total_amount=Decimal("10.005"))], [book])[0]
    far = reconcile([BankRecordFactory.build(invoice_number="K", total_amount=Decimal("10.01"))], [book])[0]

    assert not has_amount_difference(near)
    assert has_amount_difference(far)
    assert not has_amount_difference(far, Decimal("0.05"))


def test_filter_by_status(ledgers) -> None:
    outcomes = reconcile(*ledgers)

    filtered = filter_outcomes(outcomes, status=MatchStatus.MISSING_IN_BANK)

    assert [o.id for o in filtered] == ["missing-bank-3"]


def test_filter_search_is_case_insensitive(ledgers) -> None:
    outcomes = reconcile(*ledgers)

    assert [o.id for o in filter_outcomes(outcomes, search="inv-b")] == ["match-INV-B-1"]
    assert [o.id for o in filter_outcomes(outcomes, search="7.77")] == ["missing-bank-3"]


def test_filter_combines_status_and_search(ledgers) -> None:
    outcomes = reconcile(*ledgers)

    assert filter_outcomes(outcomes, status=MatchStatus.MATCHED, search="inv-b") == []
    assert filter_outcomes(outcomes) == outcomes


def test_filter_search_text_is_not_trimmed(ledgers) -> None:
    outcomes = reconcile(*ledgers)

    assert filter_outcomes(outcomes, search="  ") == []
    assert filter_outcomes(outcomes, search=" inv-a") == []


def test_filter_search_ignores_trailing_zeros() -> None:
    outcomes = reconcile(
        [BankRecordFactory.build(invoice_number="K", total_amount=Decimal("1000.00"))],
        [BookRecordFactory.build(description="K", amount=Decimal("80.50"))],
    )

    assert [o.id for o in filter_outcomes(outcomes, search="1000")] == ["match-K-0"]
    assert filter_outcomes(outcomes, search="1000.0") == []
    assert [o.id for o in filter_outcomes(outcomes, search="80.5")] == ["match-K-0"]
    assert filter_outcomes(outcomes, search="80.50") == []
