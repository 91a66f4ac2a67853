"""Reconciliation API router."""

from collections.abc import Sequence
from pathlib import Path

from fastapi import APIRouter, File, Query, UploadFile

from autorecon.config import settings
from autorecon.logger import get_logger, log_exception
from autorecon.models import BankRecord, BookRecord, MatchStatus, ReconciliationOutcome
from autorecon.schemas.reconciliation import (
    BankRecordSchema,
    BookRecordSchema,
    ReconciliationOutcomeResponse,
    ReconciliationResponse,
    ReconciliationRunRequest,
    ReconciliationSummaryResponse,
)
from autorecon.services.normalizer import (
    NormalizationError,
    decode_upload,
    parse_bank_csv,
    parse_book_csv,
)
from autorecon.services.reconciliation import load_reconciliation_config, reconcile
from autorecon.services.reporting import filter_outcomes, has_amount_difference, summarize
from autorecon.utils.exceptions import raise_bad_request, raise_too_large

logger = get_logger(__name__)

router = APIRouter(prefix="/reconciliation", tags=["reconciliation"])

EMPTY_LEDGER_DETAIL = "Upload both the Bank and the Book ledgers before running reconciliation."


def _build_outcome_response(outcome: ReconciliationOutcome) -> ReconciliationOutcomeResponse:
    bank = outcome.bank
    book = outcome.book
    return ReconciliationOutcomeResponse(
        id=outcome.id,
        status=outcome.status,
        amount_diff=outcome.amount_diff,
        has_difference=has_amount_difference(outcome, settings.reconciliation_amount_tolerance),
        note=outcome.note,
        bank=BankRecordSchema.model_validate(bank) if bank is not None else None,
        book=BookRecordSchema.model_validate(book) if book is not None else None,
    )


def _run(
    bank_records: Sequence[BankRecord],
    book_records: Sequence[BookRecord],
    *,
    status: MatchStatus | None,
    search: str,
) -> ReconciliationResponse:
    if not bank_records or not book_records:
        logger.info(
            "Reconciliation rejected: empty ledger",
            bank_records=len(bank_records),
            book_records=len(book_records),
        )
        raise_bad_request(EMPTY_LEDGER_DETAIL)

    outcomes = reconcile(bank_records, book_records, load_reconciliation_config())
    summary = summarize(bank_records, book_records, outcomes)
    visible = filter_outcomes(outcomes, status=status, search=search)

    return ReconciliationResponse(
        items=[_build_outcome_response(outcome) for outcome in visible],
        total=len(visible),
        summary=ReconciliationSummaryResponse.model_validate(summary),
    )


async def _read_csv_upload(upload: UploadFile, label: str) -> str:
    filename = Path(upload.filename or "unknown").name or "unknown"
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if extension != "csv":
        raise_bad_request(f"{label} file must be a CSV, got: {filename}")

    content = await upload.read()
    if len(content) > settings.max_upload_bytes:
        raise_too_large(f"{label} file exceeds the {settings.max_upload_bytes} byte limit")

    try:
        return decode_upload(content)
    except NormalizationError as exc:
        log_exception(logger, exc, "Failed to decode upload", level="warning", filename=filename)
        raise_bad_request(f"{label} file could not be read: {exc}", cause=exc)


@router.post("/run", response_model=ReconciliationResponse)
async def run_reconciliation(
    payload: ReconciliationRunRequest,
    status: MatchStatus | None = Query(default=None),
    search: str = Query(default="", max_length=200),
) -> ReconciliationResponse:
    """Reconcile bank and book records supplied as JSON."""
    bank_records = [item.to_record() for item in payload.bank_records]
    book_records = [item.to_record() for item in payload.book_records]
    return _run(bank_records, book_records, status=status, search=search)


@router.post("/upload", response_model=ReconciliationResponse)
async def upload_and_reconcile(
    bank_file: UploadFile = File(...),
    book_file: UploadFile = File(...),
    status: MatchStatus | None = Query(default=None),
    search: str = Query(default="", max_length=200),
) -> ReconciliationResponse:
    """Reconcile a bank statement CSV against a general ledger CSV."""
    logger.info(
        "Reconciliation upload received",
        bank_filename=bank_file.filename,
        book_filename=book_file.filename,
    )
    bank_records = parse_bank_csv(await _read_csv_upload(bank_file, "Bank"))
    book_records = parse_book_csv(await _read_csv_upload(book_file, "Book"))
    return _run(bank_records, book_records, status=status, search=search)
