"""Pydantic schemas for reconciliation API."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from autorecon.models import BankRecord, BookRecord, MatchStatus
from autorecon.schemas.base import BaseResponse, ListResponse


class BankRecordSchema(BaseModel):
    """Bank statement row as sent or returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    account_no: str = ""
    transaction_date: str = ""
    time: str = ""
    invoice_number: str = ""
    product: str = ""
    total_amount: Decimal = Decimal("0")
    original_row: dict[str, str] = Field(default_factory=dict)

    def to_record(self) -> BankRecord:
        return BankRecord(
            account_no=self.account_no.strip(),
            transaction_date=self.transaction_date.strip(),
            time=self.time.strip(),
            invoice_number=self.invoice_number.strip(),
            product=self.product.strip(),
            total_amount=self.total_amount,
            original_row=dict(self.original_row),
        )


class BookRecordSchema(BaseModel):
    """General ledger row as sent or returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    document_no: str = ""
    posting_date: str = ""
    description: str = ""
    amount: Decimal = Decimal("0")
    original_row: dict[str, str] = Field(default_factory=dict)

    def to_record(self) -> BookRecord:
        return BookRecord(
            document_no=self.document_no.strip(),
            posting_date=self.posting_date.strip(),
            description=self.description.strip(),
            amount=self.amount,
            original_row=dict(self.original_row),
        )


class ReconciliationRunRequest(BaseModel):
    """Request body to reconcile two ledgers supplied as JSON."""

    bank_records: list[BankRecordSchema] = Field(default_factory=list)
    book_records: list[BookRecordSchema] = Field(default_factory=list)


class ReconciliationOutcomeResponse(BaseModel):
    """One reconciliation outcome."""

    id: str
    status: MatchStatus
    amount_diff: Decimal
    has_difference: bool
    note: str
    bank: BankRecordSchema | None = None
    book: BookRecordSchema | None = None


class ReconciliationSummaryResponse(BaseResponse):
    """Reconciliation statistics."""

    total_bank: int
    total_book: int
    matched_count: int
    mismatch_count: int
    missing_in_book_count: int
    missing_in_bank_count: int
    unmatched_count: int
    accuracy: float


class ReconciliationResponse(ListResponse[ReconciliationOutcomeResponse]):
    """Outcomes (after filtering) plus the summary of the whole run."""

    summary: ReconciliationSummaryResponse
