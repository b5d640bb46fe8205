import uuid

from conftest import API


def _create(client, headers, name="Travel", **fields):
    return client.post(f"{API}/categories", json={"name": name, **fields}, headers=headers)


def test_categories_are_listed_by_name(client, alice):
    _create(client, alice, "Books")
    names = [c["name"] for c in client.get(f"{API}/categories", headers=alice).json()]
    assert len(names) == 9
    assert names == sorted(names)


def test_create_get_update_delete_category(client, alice):
    response = _create(client, alice, "Travel", description="Trips", color="#123ABC")
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Category created"
    category = body["data"]
    assert category["name"] == "Travel"
    assert category["color"] == "#123ABC"
    assert category["isDefault"] is False

    fetched = client.get(f"{API}/categories/{category['id']}", headers=alice).json()
    assert fetched == category

    response = client.put(
        f"{API}/categories/{category['id']}",
        json={"name": "Holidays", "description": None, "color": "#00FF00"},
        headers=alice,
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Holidays"
    assert response.json()["data"]["description"] is None

    response = client.delete(f"{API}/categories/{category['id']}", headers=alice)
    assert response.json() == {"success": True, "message": "Category deleted", "data": None}
    assert client.get(f"{API}/categories/{category['id']}", headers=alice).status_code == 404


def test_category_names_are_unique_per_user(client, alice, bob):
    assert _create(client, alice, "Travel").status_code == 201
    response = _create(client, alice, "Travel")
    assert response.status_code == 409
    assert response.json()["message"] == "You already have a category with this name"

    # a different user may reuse the name
    assert _create(client, bob, "Travel").status_code == 201


def test_update_to_existing_name_conflicts(client, alice):
    category = _create(client, alice, "Travel").json()["data"]
    response = client.put(f"{API}/categories/{category['id']}", json={"name": "Health"}, headers=alice)
    assert response.status_code == 409

    # keeping the same name is not a conflict
    response = client.put(f"{API}/categories/{category['id']}", json={"name": "Travel", "color": "#ABCDEF"}, headers=alice)
    assert response.status_code == 200


def test_category_payload_is_validated(client, alice):
    assert _create(client, alice, "T").status_code == 400
    assert _create(client, alice, "Travel", color="red").status_code == 400
    assert _create(client, alice, "Travel", color="#12345").status_code == 400
    assert _create(client, alice, "Travel", description="x" * 201).status_code == 400


def test_other_users_categories_are_not_found(client, alice, bob):
    category = _create(client, alice, "Travel").json()["data"]
    url = f"{API}/categories/{category['id']}"
    missing = f"{API}/categories/{uuid.uuid4()}"

    for target in (url, missing):
        for response in (
            client.get(target, headers=bob),
            client.put(target, json={"name": "Stolen"}, headers=bob),
            client.delete(target, headers=bob),
        ):
            assert response.status_code == 404
            assert response.json() == {"success": False, "message": "Category not found or access denied"}

    assert client.get(url, headers=alice).json()["name"] == "Travel"


def test_deleting_category_keeps_its_transactions(client, alice):
    category = _create(client, alice, "Travel").json()["data"]
    tx = client.post(
        f"{API}/transactions",
        json={
            "amount": "120.00",
            "transactionDate": "2024-02-01",
            "transactionType": "EXPENSE",
            "description": "Train",
            "categoryId": category["id"],
        },
        headers=alice,
    ).json()["data"]
    assert tx["categoryName"] == "Travel"

    client.delete(f"{API}/categories/{category['id']}", headers=alice)
    fetched = client.get(f"{API}/transactions/{tx['id']}", headers=alice).json()
    assert fetched["categoryId"] is None
    assert fetched["categoryName"] is None
