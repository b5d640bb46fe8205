import uuid
from decimal import Decimal

import pytest

from conftest import API


def _payload(**overrides):
    payload = {
        "amount": "50.00",
        "transactionDate": "2024-01-01",
        "transactionType": "EXPENSE",
        "description": "Lunch",
    }
    payload.update(overrides)
    return payload


def _create(client, headers, **overrides):
    return client.post(f"{API}/transactions", json=_payload(**overrides), headers=headers)


def _category_id(client, headers, name="Food & Groceries"):
    categories = client.get(f"{API}/categories", headers=headers).json()
    return next(c["id"] for c in categories if c["name"] == name)


def test_create_transaction(client, alice):
    category_id = _category_id(client, alice)
    response = _create(client, alice, categoryId=category_id)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Transaction created"
    tx = body["data"]
    assert Decimal(tx["amount"]) == Decimal("50.00")
    assert tx["transactionDate"] == "2024-01-01"
    assert tx["transactionType"] == "EXPENSE"
    assert tx["description"] == "Lunch"
    assert tx["categoryId"] == category_id
    assert tx["categoryName"] == "Food & Groceries"
    assert tx["source"] == "MANUAL"


def test_transactions_are_listed_newest_date_first(client, alice):
    for day in ("2024-01-05", "2024-03-01", "2023-12-31", "2024-02-14"):
        assert _create(client, alice, transactionDate=day).status_code == 201

    dates = [tx["transactionDate"] for tx in client.get(f"{API}/transactions", headers=alice).json()]
    assert dates == ["2024-03-01", "2024-02-14", "2024-01-05", "2023-12-31"]


def test_transactions_are_scoped_to_their_owner(client, alice, bob):
    _create(client, alice, description="Alice lunch")
    _create(client, bob, description="Bob lunch")

    alice_txs = client.get(f"{API}/transactions", headers=alice).json()
    assert [tx["description"] for tx in alice_txs] == ["Alice lunch"]


def test_update_and_delete_transaction(client, alice):
    tx = _create(client, alice).json()["data"]
    url = f"{API}/transactions/{tx['id']}"

    response = client.put(
        url,
        json=_payload(amount="75.5", transactionType="INCOME", description="Refund"),
        headers=alice,
    )
    assert response.status_code == 200
    updated = response.json()["data"]
    assert response.json()["message"] == "Transaction updated"
    assert Decimal(updated["amount"]) == Decimal("75.50")
    assert updated["transactionType"] == "INCOME"
    assert updated["description"] == "Refund"
    assert updated["source"] == "MANUAL"

    response = client.delete(url, headers=alice)
    assert response.json()["message"] == "Transaction deleted"
    assert client.get(url, headers=alice).status_code == 404


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": "0"},
        {"amount": "-10.00"},
        {"amount": "10.005"},
        {"amount": "abc"},
        {"transactionDate": "01/02/2024"},
        {"transactionType": "TRANSFER"},
    ],
)
def test_invalid_transactions_are_rejected(client, alice, overrides):
    response = _create(client, alice, **overrides)
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert client.get(f"{API}/transactions", headers=alice).json() == []


def test_missing_required_field_is_rejected(client, alice):
    payload = _payload()
    del payload["amount"]
    response = client.post(f"{API}/transactions", json=payload, headers=alice)
    assert response.status_code == 400
    assert response.json()["message"].startswith("amount")


def test_other_users_transactions_are_not_found(client, alice, bob):
    tx = _create(client, alice).json()["data"]
    url = f"{API}/transactions/{tx['id']}"

    for target in (url, f"{API}/transactions/{uuid.uuid4()}"):
        for response in (
            client.get(target, headers=bob),
            client.put(target, json=_payload(amount="1.00"), headers=bob),
            client.delete(target, headers=bob),
        ):
            assert response.status_code == 404
            assert response.json() == {"success": False, "message": "Transaction not found or access denied"}

    assert Decimal(client.get(url, headers=alice).json()["amount"]) == Decimal("50.00")


def test_cannot_file_transaction_under_someone_elses_category(client, alice, bob):
    bob_category = _category_id(client, bob)
    response = _create(client, alice, categoryId=bob_category)
    assert response.status_code == 404
    assert response.json()["message"] == "Category not found or access denied"

    tx = _create(client, alice).json()["data"]
    response = client.put(
        f"{API}/transactions/{tx['id']}",
        json=_payload(categoryId=bob_category),
        headers=alice,
    )
    assert response.status_code == 404


def test_manual_and_imported_transactions_differ_only_in_source(client, alice):
    _create(client, alice, amount="50.00", transactionDate="2024-01-01", description="Lunch")
    files = {"file": ("tx.csv", b"date,amount,type,description\n2024-01-01,50.00,EXPENSE,Lunch\n", "text/csv")}
    assert client.post(f"{API}/files/upload", files=files, headers=alice).status_code == 200

    imported, manual = sorted(
        client.get(f"{API}/transactions", headers=alice).json(),
        key=lambda tx: tx["source"],
    )
    assert (manual["source"], imported["source"]) == ("MANUAL", "CSV_UPLOAD")
    for key in ("transactionDate", "transactionType", "description", "categoryId"):
        assert manual[key] == imported[key]
    assert Decimal(manual["amount"]) == Decimal(imported["amount"])
