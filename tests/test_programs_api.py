"""
API tests for program endpoints
"""
from datetime import date
from decimal import Decimal

import pytest

from catalog import repository as catalog_repository
from conftest import NOW, Recorder, returning
from core import storage, uploads
from donations import repository as donation_repository
from expenses import repository as expense_repository
from programs import repository as program_repository


def program_row(program_id=1, **overrides):
    row = {
        "id": program_id,
        "title": "School Supplies Drive",
        "category": "charity",
        "description": "Books and stationery for rural schools.",
        "date": date(2025, 6, 1),
        "location": "Nugegoda",
        "total_cost": Decimal("500000"),
        "funding_goal": Decimal("500000"),
        "status": "published",
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


@pytest.fixture
def detail_data(monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning(program_row()))
    monkeypatch.setattr(
        program_repository,
        "list_images",
        returning([{"id": 5, "program_id": 1, "image_url": "https://img/a.png", "display_order": 0}]),
    )
    monkeypatch.setattr(
        catalog_repository,
        "list_goods_items_for_program",
        returning([{"id": 7, "category_id": 3, "name": "Exercise books", "required_quantity": "100"}]),
    )
    monkeypatch.setattr(
        donation_repository,
        "list_donated_items_for_program",
        returning(
            [
                {"goods_item_id": 7, "quantity": "30", "status": "Received"},
                {"goods_item_id": 7, "quantity": "25", "status": "Received"},
                {"goods_item_id": 7, "quantity": "1000", "status": "Pending"},
            ]
        ),
    )
    monkeypatch.setattr(
        donation_repository,
        "list_program_donations",
        returning(
            [
                {"id": 1, "program_id": 1, "donation_type": "money", "status": "Received", "amount": Decimal("600000")},
                {"id": 2, "program_id": 1, "donation_type": "money", "status": "Pending", "amount": Decimal("1000")},
                {"id": 3, "program_id": 1, "donation_type": "goods", "status": "Received", "amount": None},
                {"id": 4, "program_id": 1, "donation_type": "goods", "status": "Pending", "amount": None},
            ]
        ),
    )


def test_program_detail_reports_progress(client, detail_data):
    response = client.get("/programs/1")

    assert response.status_code == 200
    data = response.json()
    assert data["program"]["title"] == "School Supplies Drive"
    assert data["images"][0]["display_order"] == 0

    stats = data["donation_stats"]
    assert stats["total_raised"] == 600000
    assert stats["donation_count"] == 1
    assert stats["goods_count"] == 1
    assert stats["funding_percentage"] == 100

    [goods] = data["goods_progress"]
    assert goods == {
        "item_id": 7,
        "item_name": "Exercise books",
        "required": "100",
        "collected": 55,
        "percentage": 55,
        "unparsed": 0,
    }


def test_unpublished_program_is_not_found(client, monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning(program_row(status="draft")))
    response = client.get("/programs/1")
    assert response.status_code == 404


def test_non_charity_detail_has_no_donation_stats(client, monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning(program_row(category="event")))
    monkeypatch.setattr(program_repository, "list_images", returning([]))
    monkeypatch.setattr(catalog_repository, "list_goods_items_for_program", returning([]))
    monkeypatch.setattr(donation_repository, "list_donated_items_for_program", returning([]))

    data = client.get("/programs/1").json()

    assert data["donation_stats"] is None
    assert data["goods_progress"] == []


def test_program_listing_adds_charity_stats(client, monkeypatch):
    programs = [
        program_row(1, total_cost=Decimal("100000"), funding_goal=Decimal("100000")),
        program_row(2, category="event", total_cost=None, funding_goal=None, title="Robotics Workshop"),
    ]
    monkeypatch.setattr(program_repository, "list_published_programs", returning(programs))
    monkeypatch.setattr(
        program_repository,
        "list_images_for_programs",
        returning([{"id": 9, "program_id": 2, "image_url": "https://img/b.png", "display_order": 0}]),
    )
    monkeypatch.setattr(
        catalog_repository,
        "list_categories_for_programs",
        returning([{"id": 3, "program_id": 1, "name": "Stationery", "created_at": NOW}]),
    )
    monkeypatch.setattr(
        donation_repository,
        "list_program_donations",
        returning(
            [
                {"id": 1, "program_id": 1, "donation_type": "money", "status": "Received", "amount": Decimal("150000")},
                {"id": 2, "program_id": 1, "donation_type": "money", "status": "Pending", "amount": Decimal("5000")},
            ]
        ),
    )
    monkeypatch.setattr(expense_repository, "totals_by_program", returning({1: Decimal("40000")}))

    data = client.get("/programs").json()

    charity, event = data["programs"]
    assert charity["amount_raised"] == 150000
    assert charity["total_expenses"] == 40000
    assert charity["amount_remaining"] == 60000
    assert charity["funding_percentage"] == 100
    assert charity["donation_categories"][0]["name"] == "Stationery"
    assert "amount_raised" not in event
    assert event["program_images"][0]["image_url"] == "https://img/b.png"


def test_program_listing_rejects_unknown_category(client):
    assert client.get("/programs", params={"category": "party"}).status_code == 422


def test_create_charity_program_sets_funding_goal(as_admin, monkeypatch):
    insert = Recorder(lambda **fields: {"id": 11, **fields})
    monkeypatch.setattr(program_repository, "insert_program", insert)

    response = as_admin.post(
        "/admin/programs",
        json={
            "title": "  Flood Relief ",
            "category": "charity",
            "description": "Dry rations",
            "date": "2025-07-01",
            "location": "",
            "total_cost": "250000",
            "status": "published",
        },
    )

    assert response.status_code == 201
    [(_, fields)] = insert.calls
    assert fields["title"] == "Flood Relief"
    assert fields["total_cost"] == Decimal("250000")
    assert fields["funding_goal"] == Decimal("250000")
    assert fields["location"] is None


def test_event_program_drops_budget_fields(as_admin, monkeypatch):
    insert = Recorder(lambda **fields: {"id": 12, **fields})
    monkeypatch.setattr(program_repository, "insert_program", insert)

    as_admin.post(
        "/admin/programs",
        json={"title": "Tech Talk", "category": "event", "date": "2025-07-01", "total_cost": "1000"},
    )

    [(_, fields)] = insert.calls
    assert fields["total_cost"] is None
    assert fields["funding_goal"] is None
    assert fields["status"] == "draft"


def test_update_missing_program_is_not_found(as_admin, monkeypatch):
    monkeypatch.setattr(program_repository, "update_program", returning(None))
    response = as_admin.put(
        "/admin/programs/99",
        json={"title": "Tech Talk", "category": "event", "date": "2025-07-01"},
    )
    assert response.status_code == 404


def test_add_requirement_needs_quantity(as_admin, monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning(program_row()))
    response = as_admin.post("/admin/programs/1/requirements", json={"goods_item_id": 7, "required_quantity": "   "})
    assert response.status_code == 422


def test_gallery_upload_rejects_unsupported_files(as_admin, monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning(program_row()))
    monkeypatch.setattr(program_repository, "max_image_order", returning(2))

    response = as_admin.post(
        "/admin/programs/1/images/gallery",
        files=[("files", ("notes.txt", b"hello", "text/plain"))],
    )

    assert response.status_code == 400
    assert "Unsupported file type" in response.json()["detail"]


def test_goods_progress_for_published_program(client, detail_data):
    data = client.get("/programs/1/goods-progress").json()
    assert data["count"] == 1
    assert data["goods_progress"][0]["collected"] == 55


def test_goods_progress_hidden_for_draft_program(client, detail_data, monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning(program_row(status="draft")))
    assert client.get("/programs/1/goods-progress").status_code == 404


def test_goods_progress_for_missing_program(client, monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning(None))
    assert client.get("/programs/999/goods-progress").status_code == 404


@pytest.fixture
def image_storage(monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning(program_row()))
    upload = Recorder(lambda bucket, **kwargs: f"https://files.example/{bucket}/{kwargs['filename']}")
    monkeypatch.setattr(storage, "upload", upload)
    remove = Recorder(True)
    monkeypatch.setattr(uploads, "remove_image", remove)
    insert = Recorder(lambda **fields: {"id": 40 + fields["display_order"], **fields})
    monkeypatch.setattr(program_repository, "insert_image", insert)
    return {"upload": upload, "remove": remove, "insert": insert}


def test_feature_image_replaces_previous_one(as_admin, image_storage, monkeypatch):
    old = {"id": 3, "program_id": 1, "image_url": "https://files.example/program-images/old.png", "display_order": 0}
    delete_feature = Recorder([old])
    monkeypatch.setattr(program_repository, "delete_feature_images", delete_feature)

    response = as_admin.post(
        "/admin/programs/1/images/feature",
        files={"file": ("cover.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 201
    assert delete_feature.calls == [((1,), {})]
    assert image_storage["remove"].calls == [(("program-images", old["image_url"]), {})]
    [(_, fields)] = image_storage["insert"].calls
    assert fields["display_order"] == 0
    assert fields["image_url"] == "https://files.example/program-images/cover.png"


def test_gallery_images_follow_highest_order(as_admin, image_storage, monkeypatch):
    monkeypatch.setattr(program_repository, "max_image_order", returning(4))

    response = as_admin.post(
        "/admin/programs/1/images/gallery",
        files=[
            ("files", ("a.jpg", b"jpeg-a", "image/jpeg")),
            ("files", ("b.webp", b"webp-b", "image/webp")),
        ],
    )

    assert response.status_code == 201
    assert [fields["display_order"] for _, fields in image_storage["insert"].calls] == [5, 6]
    assert response.json()["count"] == 2
    assert image_storage["remove"].calls == []
