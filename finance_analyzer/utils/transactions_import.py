# finance_analyzer/utils/transactions_import.py
"""
CSV transaction import.

Expected file layout (header row is skipped)::

    date,amount,type,description
    2024-01-01,50.00,EXPENSE,Lunch

``date`` is strictly ``YYYY-MM-DD``, ``amount`` a positive decimal with at most
two decimal places, ``type`` a TransactionType name in any case. Rows that do
not fit are logged and skipped; only file-level problems (undecodable bytes,
database errors) fail the upload.
"""
from __future__ import annotations

from typing import List, Tuple
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import csv
import io
import logging
import re

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_analyzer.core.exceptions import ImportFailure
from finance_analyzer.crud.transaction import add_transactions_for_user
from finance_analyzer.crud.upload import create_upload, set_upload_status
from finance_analyzer.crud.user import get_user_by_username
from finance_analyzer.models.transaction import TransactionSource, TransactionType
from finance_analyzer.models.upload import FileUpload, UploadStatus
from finance_analyzer.schemas.transaction import TransactionCreate

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MIN_FIELDS = 4


def _parse_date(value: str) -> date:
    s = value.strip()
    if not _DATE_RE.match(s):
        raise ValueError(f"invalid date {s!r}, expected YYYY-MM-DD")
    # strptime still rejects impossible dates such as 2024-02-30
    return datetime.strptime(s, DATE_FORMAT).date()


def _parse_amount(value: str) -> Decimal:
    s = value.strip()
    try:
        return Decimal(s)
    except InvalidOperation:
        raise ValueError(f"invalid amount {s!r}")


def _parse_type(value: str) -> TransactionType:
    s = value.strip().upper()
    try:
        return TransactionType[s]
    except KeyError:
        raise ValueError(f"unknown transaction type {value.strip()!r}")


def parse_transaction_row(record: List[str]) -> TransactionCreate:
    """Build a transaction from one CSV record or raise ValueError."""
    if len(record) < MIN_FIELDS:
        raise ValueError(f"expected {MIN_FIELDS} fields, got {len(record)}")

    tx_date = _parse_date(record[0])
    amount = _parse_amount(record[1])
    tx_type = _parse_type(record[2])
    description = record[3].strip()

    # Same validation as a manually entered transaction (amount > 0, 2 decimals)
    try:
        return TransactionCreate(
            amount=amount,
            transaction_date=tx_date,
            transaction_type=tx_type,
            description=description,
        )
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        raise ValueError(f"{field}: {first['msg']}")


def parse_transaction_csv(file_bytes: bytes) -> Tuple[List[TransactionCreate], int]:
    """
    Parse an uploaded CSV into transactions, skipping the header and any
    invalid rows. Returns the parsed transactions and the number of skipped
    rows. Raises UnicodeDecodeError for files that are not UTF-8.
    """
    text = file_bytes.decode("utf-8-sig")
    reader = csv.reader(io.StringIO(text))
    next(reader, None)  # header

    transactions: List[TransactionCreate] = []
    skipped = 0
    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            # the reader resumes on the following line
            skipped += 1
            logger.warning(f"Skipping unreadable record on line {reader.line_num}: {e}")
            continue

        # skip empty lines
        if not any(cell.strip() for cell in record):
            continue
        try:
            transactions.append(parse_transaction_row(record))
        except ValueError as e:
            skipped += 1
            logger.warning(f"Skipping invalid record on line {reader.line_num}: {','.join(record)} ({e})")

    if skipped:
        logger.info(f"Parsed {len(transactions)} transactions, skipped {skipped} invalid records")
    return transactions, skipped


async def process_transaction_csv(
    filename: str,
    content: bytes,
    username: str,
    db: AsyncSession,
) -> FileUpload:
    """
    Import an uploaded CSV for ``username`` and track it as a FileUpload.

    The upload goes UPLOADED -> PROCESSING -> SUCCESS, or FAILED with the
    error message when reading or persisting blows up, in which case an
    ImportFailure is raised after the FAILED status has been committed.
    """
    user = await get_user_by_username(username, db)
    if user is None:
        raise ImportFailure(f"Failed to process CSV file: user not found: {username}")

    upload = await create_upload(user.id, filename, len(content), db)
    upload = await set_upload_status(upload, UploadStatus.PROCESSING, db)
    upload_id = upload.id

    try:
        rows, skipped = parse_transaction_csv(content)
        created = await add_transactions_for_user(user.id, rows, db, source=TransactionSource.CSV_UPLOAD)
        # Transactions and the SUCCESS status land in the same commit
        upload = await set_upload_status(upload, UploadStatus.SUCCESS, db, records_count=len(created))
    except Exception as e:
        error_details = str(e) or type(e).__name__
        logger.error(f"Error processing CSV file {filename}: {error_details}")
        try:
            await db.rollback()
            await db.refresh(upload)
            await set_upload_status(upload, UploadStatus.FAILED, db, error_details=error_details)
        except SQLAlchemyError as mark_error:
            # the import failure is still reported; the upload stays PROCESSING
            logger.error(f"Could not mark upload {upload_id} as FAILED: {mark_error}")
        raise ImportFailure(f"Failed to process CSV file: {error_details}") from e

    logger.info(
        f"Successfully processed {upload.records_count} transactions from file: {filename}"
        f" ({skipped} rows skipped)"
    )
    return upload
