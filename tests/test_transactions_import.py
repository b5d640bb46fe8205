import csv
import logging
from datetime import date
from decimal import Decimal

import pytest

from finance_analyzer.models.transaction import TransactionType
from finance_analyzer.utils.transactions_import import parse_transaction_csv, parse_transaction_row


def test_parse_row_builds_transaction():
    tx = parse_transaction_row(["2024-01-01", " 50.00 ", "expense", "  Lunch  "])
    assert tx.transaction_date == date(2024, 1, 1)
    assert tx.amount == Decimal("50.00")
    assert tx.transaction_type == TransactionType.EXPENSE
    assert tx.description == "Lunch"
    assert tx.category_id is None


def test_parse_row_ignores_extra_fields():
    tx = parse_transaction_row(["2024-03-15", "100", "Income", "Salary", "extra"])
    assert tx.transaction_type == TransactionType.INCOME
    assert tx.amount == Decimal("100")


@pytest.mark.parametrize(
    "record",
    [
        ["bad-row"],
        ["2024-01-01", "10", "EXPENSE"],
        ["01/02/2024", "10", "EXPENSE", "wrong date format"],
        ["2024-1-01", "10", "EXPENSE", "no zero padding"],
        ["2024-02-30", "10", "EXPENSE", "impossible date"],
        ["2024-01-01", "ten", "EXPENSE", "not a number"],
        ["2024-01-01", "", "EXPENSE", "empty amount"],
        ["2024-01-01", "10", "TRANSFER", "unknown type"],
        ["2024-01-01", "0", "EXPENSE", "zero"],
        ["2024-01-01", "-5.00", "EXPENSE", "negative"],
        ["2024-01-01", "1.005", "EXPENSE", "three decimals"],
        ["2024-01-01", "NaN", "EXPENSE", "not finite"],
    ],
)
def test_parse_row_rejects_invalid_records(record):
    with pytest.raises(ValueError):
        parse_transaction_row(record)


def test_parse_csv_skips_header_and_invalid_rows(caplog):
    content = (
        b"date,amount,type,description\n"
        b"2024-01-01,50.00,EXPENSE,Lunch\n"
        b"bad-row\n"
        b"2024-01-02,100,INCOME,Salary"
    )
    with caplog.at_level(logging.WARNING, logger="finance_analyzer.utils.transactions_import"):
        rows, skipped = parse_transaction_csv(content)

    assert [r.description for r in rows] == ["Lunch", "Salary"]
    assert skipped == 1
    assert any("bad-row" in message for message in caplog.messages)


def test_parse_csv_header_only_yields_nothing():
    assert parse_transaction_csv(b"date,amount,type,description\n") == ([], 0)


def test_parse_csv_empty_content_yields_nothing():
    assert parse_transaction_csv(b"") == ([], 0)


def test_parse_csv_handles_bom_quotes_and_blank_lines():
    content = (
        "\ufeffdate,amount,type,description\r\n"
        "\r\n"
        '2024-05-01,12.50,expense,"Coffee, beans"\r\n'
    ).encode("utf-8")
    rows, skipped = parse_transaction_csv(content)
    assert (len(rows), skipped) == (1, 0)
    assert rows[0].description == "Coffee, beans"


def test_parse_csv_counts_every_malformed_kind():
    good = [f"2024-01-{day:02d},{day}.00,EXPENSE,row {day}" for day in range(1, 6)]
    bad = ["2024-13-01,1,EXPENSE,bad month", "2024-01-01,x,EXPENSE,bad amount", "2024-01-01,1,LOAN,bad type"]
    content = "\n".join(["date,amount,type,description"] + bad[:1] + good + bad[1:]).encode()
    rows, skipped = parse_transaction_csv(content)
    assert (len(rows), skipped) == (len(good), len(bad))


def test_parse_csv_rejects_undecodable_bytes():
    with pytest.raises(UnicodeDecodeError):
        parse_transaction_csv(b"date,amount,type,description\n2024-01-01,1,EXPENSE,caf\xe9\n")


def test_parse_csv_skips_row_the_reader_cannot_read(caplog):
    oversized = "x" * (csv.field_size_limit() + 1)
    content = (
        "date,amount,type,description\n"
        "2024-01-01,50.00,EXPENSE,Lunch\n"
        f"2024-01-02,10.00,EXPENSE,{oversized}\n"
        "2024-01-03,100,INCOME,Salary\n"
    ).encode()
    with caplog.at_level(logging.WARNING, logger="finance_analyzer.utils.transactions_import"):
        rows, skipped = parse_transaction_csv(content)

    assert [r.description for r in rows] == ["Lunch", "Salary"]
    assert skipped == 1
    assert any("unreadable record" in message for message in caplog.messages)
