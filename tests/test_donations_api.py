"""
API tests for donation endpoints
"""
from datetime import date
from decimal import Decimal

import pytest

from catalog import repository as catalog_repository
from conftest import NOW, Recorder, returning
from donations import repository as donation_repository
from donations import service as donation_service
from programs import repository as program_repository

DONOR = {
    "donor_name": "Nimal Perera",
    "donor_address": "12 Lake Road, Colombo",
    "donor_contact": "0771234567",
    "program_id": 1,
}


@pytest.fixture
def charity_program(monkeypatch):
    program = {
        "id": 1,
        "title": "School Supplies Drive",
        "category": "charity",
        "status": "published",
        "date": date(2025, 6, 1),
    }
    monkeypatch.setattr(program_repository, "get_program", returning(program))
    monkeypatch.setattr(catalog_repository, "get_category", returning({"id": 3, "program_id": 1, "name": "Stationery"}))
    return program


@pytest.fixture
def insert_recorder(monkeypatch):
    def _insert(**fields):
        donation = {"id": 100, "donation_date": NOW, "created_at": NOW, **fields}
        donation.pop("items")
        return donation, len(fields["items"])

    recorder = Recorder(_insert)
    monkeypatch.setattr(donation_repository, "insert_donation_with_items", recorder)
    return recorder


def test_money_donation_is_stored_as_pending(client, charity_program, insert_recorder):
    response = client.post("/donations", json={**DONOR, "donation_type": "money", "amount": "2500"})

    assert response.status_code == 201
    [(_, fields)] = insert_recorder.calls
    assert fields["status"] == "Pending"
    assert fields["amount"] == Decimal("2500")
    assert fields["items"] == []
    assert response.json()["donation"]["status"] == "Pending"


@pytest.mark.parametrize("amount", [None, "0", "-10"])
def test_money_donation_needs_positive_amount(client, charity_program, insert_recorder, amount):
    response = client.post("/donations", json={**DONOR, "donation_type": "money", "amount": amount})
    assert response.status_code == 422
    assert insert_recorder.calls == []


def test_missing_donor_details_are_rejected(client, charity_program, insert_recorder):
    response = client.post(
        "/donations",
        json={**DONOR, "donor_contact": "   ", "donation_type": "money", "amount": "100"},
    )
    assert response.status_code == 422
    assert response.json()["detail"] == "Please fill in all required fields."


def test_donation_to_draft_program_is_rejected(client, monkeypatch, insert_recorder):
    monkeypatch.setattr(
        program_repository,
        "get_program",
        returning({"id": 1, "category": "charity", "status": "draft"}),
    )
    response = client.post("/donations", json={**DONOR, "donation_type": "money", "amount": "100"})
    assert response.status_code == 422


def test_goods_donation_with_items(client, charity_program, insert_recorder, monkeypatch):
    monkeypatch.setattr(catalog_repository, "count_goods_items_in_category", returning(2))

    response = client.post(
        "/donations",
        json={
            **DONOR,
            "donation_type": "goods",
            "category_id": 3,
            "items": [
                {"goods_item_id": 7, "quantity": " 10 books "},
                {"goods_item_id": 8, "quantity": "5"},
            ],
        },
    )

    assert response.status_code == 201
    [(_, fields)] = insert_recorder.calls
    assert fields["amount"] is None
    assert fields["items"] == [(7, "10 books"), (8, "5")]
    assert response.json()["item_count"] == 2


def test_goods_donation_rejects_non_numeric_quantity(client, charity_program, insert_recorder):
    response = client.post(
        "/donations",
        json={
            **DONOR,
            "donation_type": "goods",
            "category_id": 3,
            "items": [{"goods_item_id": 7, "quantity": "a few"}],
        },
    )

    assert response.status_code == 422
    assert "positive whole number" in response.json()["detail"]
    assert insert_recorder.calls == []


def test_goods_donation_needs_items(client, charity_program, insert_recorder):
    response = client.post("/donations", json={**DONOR, "donation_type": "goods", "category_id": 3, "items": []})
    assert response.status_code == 422
    assert response.json()["detail"] == "Please select at least one item to donate."


def test_goods_donation_items_must_belong_to_category(client, charity_program, insert_recorder, monkeypatch):
    monkeypatch.setattr(catalog_repository, "count_goods_items_in_category", returning(0))
    response = client.post(
        "/donations",
        json={**DONOR, "donation_type": "goods", "category_id": 3, "items": [{"goods_item_id": 70, "quantity": "1"}]},
    )
    assert response.status_code == 422


def test_history_summary(client, monkeypatch):
    donations = [
        {"id": 1, "donation_type": "money", "status": "Received", "amount": Decimal("1000"), "donation_date": NOW},
        {"id": 2, "donation_type": "goods", "status": "Received", "amount": None, "donation_date": NOW},
        {"id": 3, "donation_type": "goods", "status": "Received", "amount": None, "donation_date": NOW},
    ]
    list_donations = Recorder(donations)
    monkeypatch.setattr(donation_repository, "list_donations", list_donations)
    monkeypatch.setattr(
        donation_repository,
        "list_items_for_donations",
        returning(
            [
                {"id": 1, "donation_id": 2, "goods_item_id": 7, "quantity": "10", "item_name": "Books"},
                {"id": 2, "donation_id": 2, "goods_item_id": 8, "quantity": "3 boxes", "item_name": "Pens"},
            ]
        ),
    )

    data = client.get("/donations/history").json()

    assert list_donations.calls == [((), {"status": "Received"})]
    assert data["summary"] == {
        "total_money": 1000,
        "formatted_total_money": "LKR 1,000",
        "money_count": 1,
        "goods_count": 2,
    }
    assert data["donations"][0]["formatted_amount"] == "LKR 1,000"
    assert data["donations"][0]["formatted_date"] == "March 5, 2025"
    assert data["donations"][1]["goods_description"] == "Books - 10, Pens - 3 boxes"
    assert data["donations"][2]["goods_description"] == "No items"


def test_format_goods_description():
    assert donation_service.format_goods_description([]) == "No items"
    assert donation_service.format_goods_description([{"item_name": None, "quantity": "2"}]) == "Unknown item - 2"


def test_admin_donation_list_counts(as_admin, monkeypatch):
    monkeypatch.setattr(
        donation_repository,
        "list_donations",
        returning(
            [
                {"id": 1, "status": "Pending", "donation_type": "money"},
                {"id": 2, "status": "Received", "donation_type": "money"},
                {"id": 3, "status": "Pending", "donation_type": "goods"},
            ]
        ),
    )
    monkeypatch.setattr(donation_repository, "list_items_for_donations", returning([]))

    data = as_admin.get("/admin/donations").json()

    assert data["stats"] == {"all": 3, "pending": 2, "received": 1}


def test_admin_marks_donation_received(as_admin, monkeypatch):
    update = Recorder({"id": 5, "status": "Received"})
    monkeypatch.setattr(donation_repository, "update_status", update)

    response = as_admin.patch("/admin/donations/5/status", json={"status": "Received"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "donation_id": 5, "status": "Received"}
    assert update.calls == [((5, "Received"), {})]


def test_admin_status_must_be_known(as_admin):
    response = as_admin.patch("/admin/donations/5/status", json={"status": "Lost"})
    assert response.status_code == 422


def test_admin_status_update_missing_donation(as_admin, monkeypatch):
    monkeypatch.setattr(donation_repository, "update_status", returning(None))
    response = as_admin.patch("/admin/donations/5/status", json={"status": "Pending"})
    assert response.status_code == 404
