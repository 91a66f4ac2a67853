"""Services package."""

from autorecon.services.normalizer import (
    NormalizationError,
    clean_amount,
    decode_upload,
    parse_bank_csv,
    parse_book_csv,
)
from autorecon.services.reconciliation import (
    DEFAULT_CONFIG,
    ReconciliationConfig,
    load_reconciliation_config,
    normalize_date,
    reconcile,
)
from autorecon.services.reporting import (
    SummaryStats,
    count_by_status,
    filter_outcomes,
    has_amount_difference,
    summarize,
)

__all__ = [
    "DEFAULT_CONFIG",
    "NormalizationError",
    "ReconciliationConfig",
    "SummaryStats",
    "clean_amount",
    "count_by_status",
    "decode_upload",
    "filter_outcomes",
    "has_amount_difference",
    "load_reconciliation_config",
    "normalize_date",
    "parse_bank_csv",
    "parse_book_csv",
    "reconcile",
    "summarize",
]
