"""
Tests for trip endpoints, including balances and cross-user isolation.
"""
from decimal import Decimal


def create_trip(client, headers, title="Ski Trip", members=("Alice", "Bob")):
    response = client.post(
        "/api/trips",
        json={"title": title, "member_names": list(members)},
        headers=headers
    )
    assert response.status_code == 201
    return response.json()


def member_id(trip, name):
    return next(m["id"] for m in trip["members"] if m["name"] == name)


def add_expense(client, headers, trip_id, title, amount, payer_id):
    return client.post(
        f"/api/trips/{trip_id}/expenses",
        json={"title": title, "amount": amount, "paid_by_member_id": payer_id},
        headers=headers
    )


def test_create_trip(client, auth_headers):
    trip = create_trip(client, auth_headers, members=("Bob", "Alice"))

    assert trip["title"] == "Ski Trip"
    assert trip["member_count"] == 2
    assert [m["name"] for m in trip["members"]] == ["Alice", "Bob"]


def test_create_trip_with_blank_members_is_rejected(client, auth_headers):
    response = client.post(
        "/api/trips",
        json={"title": "Ski Trip", "member_names": ["", "  "]},
        headers=auth_headers
    )
    assert response.status_code == 422
    assert client.get("/api/trips", headers=auth_headers).json() == []


def test_create_trip_duplicate_title(client, auth_headers):
    create_trip(client, auth_headers)

    response = client.post(
        "/api/trips",
        json={"title": "Ski Trip", "member_names": ["Carol"]},
        headers=auth_headers
    )
    assert response.status_code == 409


def test_requires_authentication(client):
    assert client.get("/api/trips").status_code == 401
    assert client.post("/api/trips", json={"title": "x", "member_names": ["a"]}).status_code == 401


def test_list_trips_with_totals(client, auth_headers):
    trip = create_trip(client, auth_headers)
    add_expense(client, auth_headers, trip["id"], "Hotel", "100.00", member_id(trip, "Alice"))

    trips = client.get("/api/trips", headers=auth_headers).json()

    assert len(trips) == 1
    assert Decimal(trips[0]["total_expense"]) == Decimal("100.00")
    assert Decimal(trips[0]["per_head_expense"]) == Decimal("50.00")


def test_balances_follow_expenses(client, auth_headers):
    trip = create_trip(client, auth_headers)
    alice, bob = member_id(trip, "Alice"), member_id(trip, "Bob")

    assert add_expense(client, auth_headers, trip["id"], "Hotel", "100.00", alice).status_code == 201
    ledger = client.get(f"/api/trips/{trip['id']}/balances", headers=auth_headers).json()
    assert Decimal(ledger["total_expense"]) == Decimal("100.00")
    assert Decimal(ledger["per_head_expense"]) == Decimal("50.00")
    assert [(b["member_name"], Decimal(b["balance"])) for b in ledger["balances"]] == [
        ("Alice", Decimal("50.00")),
        ("Bob", Decimal("-50.00")),
    ]

    assert add_expense(client, auth_headers, trip["id"], "Dinner", "40.00", bob).status_code == 201
    ledger = client.get(f"/api/trips/{trip['id']}/balances", headers=auth_headers).json()
    assert Decimal(ledger["total_expense"]) == Decimal("140.00")
    rows = {b["member_name"]: b for b in ledger["balances"]}
    assert Decimal(rows["Alice"]["total_paid"]) == Decimal("100.00")
    assert Decimal(rows["Alice"]["should_pay"]) == Decimal("70.00")
    assert Decimal(rows["Alice"]["balance"]) == Decimal("30.00")
    assert Decimal(rows["Bob"]["balance"]) == Decimal("-30.00")


def test_balances_without_expenses(client, auth_headers):
    trip = create_trip(client, auth_headers, members=("Alice", "Bob", "Carol"))

    ledger = client.get(f"/api/trips/{trip['id']}/balances", headers=auth_headers).json()

    assert ledger["member_count"] == 3
    assert all(Decimal(b["balance"]) == 0 for b in ledger["balances"])


def test_balances_are_rounded_for_display(client, auth_headers):
    trip = create_trip(client, auth_headers, members=("Alice", "Bob", "Carol"))
    add_expense(client, auth_headers, trip["id"], "Hotel", "100.00", member_id(trip, "Alice"))

    ledger = client.get(f"/api/trips/{trip['id']}/balances", headers=auth_headers).json()
    rows = {b["member_name"]: b for b in ledger["balances"]}

    assert rows["Alice"]["balance"] == "66.67"
    assert rows["Bob"]["should_pay"] == "33.33"
    assert rows["Bob"]["balance"] == "-33.33"


def test_rename_trip(client, auth_headers):
    trip = create_trip(client, auth_headers)

    response = client.patch(f"/api/trips/{trip['id']}", json={"title": "Alps"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["title"] == "Alps"
    assert response.json()["member_count"] == 2


def test_delete_trip(client, auth_headers):
    trip = create_trip(client, auth_headers)
    add_expense(client, auth_headers, trip["id"], "Hotel", "100.00", member_id(trip, "Alice"))

    assert client.delete(f"/api/trips/{trip['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/api/trips/{trip['id']}", headers=auth_headers).status_code == 404


def test_other_user_cannot_touch_trip(client, auth_headers, other_auth_headers):
    trip = create_trip(client, auth_headers)
    trip_id = trip["id"]
    alice = member_id(trip, "Alice")

    assert client.get("/api/trips", headers=other_auth_headers).json() == []
    assert client.get(f"/api/trips/{trip_id}", headers=other_auth_headers).status_code == 404
    assert client.get(f"/api/trips/{trip_id}/members", headers=other_auth_headers).status_code == 404
    assert client.get(f"/api/trips/{trip_id}/expenses", headers=other_auth_headers).status_code == 404
    assert client.get(f"/api/trips/{trip_id}/balances", headers=other_auth_headers).status_code == 404
    assert add_expense(client, other_auth_headers, trip_id, "Sneaky", "10.00", alice).status_code == 404
    assert client.patch(f"/api/trips/{trip_id}", json={"title": "Mine"}, headers=other_auth_headers).status_code == 404
    assert client.delete(f"/api/trips/{trip_id}", headers=other_auth_headers).status_code == 404

    still_there = client.get(f"/api/trips/{trip_id}", headers=auth_headers).json()
    assert still_there["title"] == "Ski Trip"
    assert client.get(f"/api/trips/{trip_id}/expenses", headers=auth_headers).json() == []


def test_foreign_and_missing_trip_responses_match(client, auth_headers, other_auth_headers):
    trip = create_trip(client, auth_headers)

    foreign = client.get(f"/api/trips/{trip['id']}", headers=other_auth_headers)
    missing = client.get("/api/trips/does-not-exist", headers=other_auth_headers)

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()
