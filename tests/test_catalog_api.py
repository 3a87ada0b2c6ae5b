"""
API tests for donation categories and goods items
"""
from catalog import repository as catalog_repository
from conftest import NOW, Recorder, returning
from programs import repository as program_repository


def test_unique_categories_keep_first_of_each_name(as_admin, monkeypatch):
    monkeypatch.setattr(
        catalog_repository,
        "list_all_categories",
        returning(
            [
                {"id": 1, "program_id": 1, "name": "Stationery", "created_at": NOW},
                {"id": 2, "program_id": 2, "name": "Food", "created_at": NOW},
                {"id": 3, "program_id": 3, "name": "Stationery", "created_at": NOW},
            ]
        ),
    )

    data = as_admin.get("/admin/categories").json()

    assert data["categories"] == [{"id": 1, "name": "Stationery"}, {"id": 2, "name": "Food"}]


def test_public_categories_hidden_for_draft_program(client, monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning({"id": 1, "status": "draft"}))
    assert client.get("/programs/1/categories").status_code == 404


def test_create_category_needs_a_name(as_admin, monkeypatch):
    monkeypatch.setattr(program_repository, "get_program", returning({"id": 1, "status": "draft"}))
    response = as_admin.post("/admin/categories", json={"program_id": 1, "name": "   "})
    assert response.status_code == 422
    assert response.json()["detail"] == "Category name is required."


def test_create_goods_item(as_admin, monkeypatch):
    monkeypatch.setattr(catalog_repository, "get_category", returning({"id": 3, "program_id": 1, "name": "Stationery"}))
    insert = Recorder(lambda **fields: {"id": 7, **fields})
    monkeypatch.setattr(catalog_repository, "insert_goods_item", insert)

    response = as_admin.post(
        "/admin/goods-items",
        json={"category_id": 3, "name": "Exercise books", "required_quantity": " "},
    )

    assert response.status_code == 201
    [(_, fields)] = insert.calls
    assert fields == {"category_id": 3, "name": "Exercise books", "required_quantity": None}


def test_goods_items_for_missing_category(client, monkeypatch):
    monkeypatch.setattr(catalog_repository, "get_category", returning(None))
    assert client.get("/categories/9/goods-items").status_code == 404


def test_goods_item_needs_a_name(as_admin, monkeypatch):
    monkeypatch.setattr(catalog_repository, "get_category", returning({"id": 3, "program_id": 1, "name": "Stationery"}))
    response = as_admin.post("/admin/goods-items", json={"category_id": 3, "name": "  ", "required_quantity": "5"})
    assert response.status_code == 422
    assert response.json()["detail"] == "Item name is required."
