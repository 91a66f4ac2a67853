"""Turn bank and book CSV exports into typed ledger records."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from autorecon.logger import get_logger
from autorecon.models import BankRecord, BookRecord

logger = get_logger(__name__)

BOM = "\ufeff"
_LINE_SPLIT = re.compile(r"\r?\n")
_AMOUNT_NOISE = re.compile(r"[\"',]")


class NormalizationError(Exception):
    """Raised when an uploaded ledger cannot be read as text."""


def decode_upload(content: bytes) -> str:
    """Decode uploaded bytes as UTF-8, dropping a byte-order mark."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise NormalizationError(f"File is not valid UTF-8 text: {exc.reason}") from exc


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line on commas that sit outside double quotes.

    Quote characters only toggle quoting and are not kept, so ``"1,000.00"``
    comes back as ``1,000.00``.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def clean_amount(value: str | None) -> Decimal:
    """Parse an amount such as ``"1,234.50"``; blanks and garbage become zero."""
    if not value:
        return Decimal("0")
    cleaned = _AMOUNT_NOISE.sub("", value).strip()
    if not cleaned:
        return Decimal("0")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        logger.warning("Unparseable amount treated as zero", raw_amount=value)
        return Decimal("0")
    if not amount.is_finite():
        logger.warning("Non-finite amount treated as zero", raw_amount=value)
        return Decimal("0")
    return amount


def read_rows(text: str) -> list[dict[str, str]]:
    """Read header-keyed rows from CSV text.

    Headers are lower-cased and trimmed, values are trimmed, blank lines are
    ignored and rows with a different field count than the header are skipped.
    """
    lines = [line for line in _LINE_SPLIT.split(text) if line.strip()]
    if not lines:
        return []

    headers = [h.strip() for h in split_csv_line(lines[0].lower().lstrip(BOM))]
    rows: list[dict[str, str]] = []
    for line_no, line in enumerate(lines[1:], start=2):
        values = split_csv_line(line)
        if len(values) != len(headers):
            logger.debug(
                "Skipping CSV row with unexpected field count",
                line_no=line_no,
                expected=len(headers),
                found=len(values),
            )
            continue
        rows.append({header: value.strip() for header, value in zip(headers, values, strict=True)})
    return rows


def parse_bank_csv(text: str) -> list[BankRecord]:
    """Parse a bank statement export into :class:`BankRecord` items."""
    records = [
        BankRecord(
            account_no=row.get("account_no", ""),
            transaction_date=row.get("transaction_date", ""),
            time=row.get("time", ""),
            invoice_number=row.get("invoice_number", ""),
            product=row.get("product", ""),
            total_amount=clean_amount(row.get("total_amount")),
            original_row=row,
        )
        for row in read_rows(text)
    ]
    logger.info("Bank CSV parsed", records=len(records))
    return records


def parse_book_csv(text: str) -> list[BookRecord]:
    """Parse a general ledger export into :class:`BookRecord` items."""
    records = [
        BookRecord(
            document_no=row.get("document_no", ""),
            posting_date=row.get("posting_date", ""),
            description=row.get("description", ""),
            amount=clean_amount(row.get("amount")),
            original_row=row,
        )
        for row in read_rows(text)
    ]
    logger.info("Book CSV parsed", records=len(records))
    return records
