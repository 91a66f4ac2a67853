from autorecon.schemas.base import BaseResponse, ListResponse
from autorecon.schemas.reconciliation import (
    BankRecordSchema,
    BookRecordSchema,
    ReconciliationOutcomeResponse,
    ReconciliationResponse,
    ReconciliationRunRequest,
    ReconciliationSummaryResponse,
)

__all__ = [
    "BankRecordSchema",
    "BaseResponse",
    "BookRecordSchema",
    "ListResponse",
    "ReconciliationOutcomeResponse",
    "ReconciliationResponse",
    "ReconciliationRunRequest",
    "ReconciliationSummaryResponse",
]
