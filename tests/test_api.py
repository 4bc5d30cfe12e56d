import importlib

import pytest
from fastapi.testclient import TestClient

import api as api_module
from config import settings

LIBRARIAN = {"X-Actor-Name": "Rtan", "X-Actor-Role": "LIBRARIAN", "X-Actor-Age": "30"}
MEMBER = {"X-Actor-Name": "Aspiring Developer", "X-Actor-Role": "member"}
OTHER_MEMBER = {"X-Actor-Name": "Bookworm", "X-Actor-Role": "MEMBER"}


@pytest.fixture
def client():
    # Her test kendi bellek içi kütüphanesiyle başlasın
    importlib.reload(api_module)
    return TestClient(api_module.app)


def _add(client, title, author="Author"):
    response = client.post("/books", headers=LIBRARIAN, json={"title": title, "author": author})
    assert response.status_code == 200
    return response.json()["book_id"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["environment"] == settings.environment


def test_get_books_empty(client):
    response = client.get("/books")
    assert response.status_code == 200
    assert response.json() == []


def test_add_and_list_books(client):
    _add(client, "TS Grammar")
    _add(client, "Discipline Guide")

    titles = [b["title"] for b in client.get("/books").json()]
    assert titles == ["TS Grammar", "Discipline Guide"]


def test_member_cannot_add(client):
    response = client.post("/books", headers=MEMBER, json={"title": "X", "author": "Y"})
    assert response.status_code == 403
    assert response.json()["detail"]["kind"] == "NOT_AUTHORIZED"
    assert client.get("/books").json() == []


def test_missing_actor_headers(client):
    response = client.post("/books", json={"title": "X", "author": "Y"})
    assert response.status_code == 422


def test_unknown_role(client):
    headers = {"X-Actor-Name": "Ghost", "X-Actor-Role": "ADMIN"}
    response = client.post("/books", headers=headers, json={"title": "X", "author": "Y"})
    assert response.status_code == 422


def test_delete_book(client):
    book_id = _add(client, "TS Grammar")

    assert client.delete(f"/books/{book_id}", headers=MEMBER).status_code == 403
    assert client.delete(f"/books/{book_id}", headers=LIBRARIAN).status_code == 200
    assert client.get("/books").json() == []

    # Kimse ödünç almadığı için kimlik de bırakılır
    assert book_id not in api_module.books_by_id
    assert client.delete(f"/books/{book_id}", headers=LIBRARIAN).status_code == 404


def test_deleted_book_on_loan_can_be_returned(client):
    book_id = _add(client, "TS Grammar")
    assert client.post(f"/books/{book_id}/rent", headers=MEMBER).status_code == 200
    assert client.delete(f"/books/{book_id}", headers=LIBRARIAN).status_code == 200
    assert book_id in api_module.books_by_id

    # Katalogda değil ama hâlâ ödünçte
    response = client.delete(f"/books/{book_id}", headers=LIBRARIAN)
    assert response.status_code == 404
    assert response.json()["detail"]["kind"] == "NOT_FOUND"

    assert client.post(f"/books/{book_id}/return", headers=MEMBER).status_code == 200
    assert book_id not in api_module.books_by_id
    assert client.post(f"/books/{book_id}/rent", headers=MEMBER).status_code == 404


def test_unknown_book_id(client):
    assert client.post("/books/nope/rent", headers=MEMBER).status_code == 404


def test_rent_and_return_flow(client):
    first = _add(client, "TS Grammar")
    second = _add(client, "Discipline Guide")

    assert client.post(f"/books/{first}/rent", headers=MEMBER).status_code == 200
    response = client.post(f"/books/{second}/rent", headers=MEMBER)
    assert response.status_code == 409
    assert response.json()["detail"]["kind"] == "ALREADY_BORROWING"

    assert client.post(f"/books/{first}/rent", headers=LIBRARIAN).status_code == 403

    loans = client.get("/loans", headers=LIBRARIAN).json()
    assert loans["Aspiring Developer"]["book_id"] == first

    response = client.post(f"/books/{second}/return", headers=MEMBER)
    assert response.status_code == 409
    assert response.json()["detail"]["kind"] == "NOT_BORROWED"

    response = client.post(f"/books/{first}/return", headers=MEMBER)
    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert client.get("/loans", headers=LIBRARIAN).json() == {}


def test_stats(client):
    first = _add(client, "TS Grammar", "Kang Changmin")
    _add(client, "Cooking Show", "Baek Jongwon")
    client.post(f"/books/{first}/rent", headers=OTHER_MEMBER)

    assert client.get("/stats").json() == {"total_books": 2, "unique_authors": 2, "active_loans": 1}


def test_loans_require_actor(client):
    first = _add(client, "TS Grammar")
    second = _add(client, "Discipline Guide")
    client.post(f"/books/{first}/rent", headers=MEMBER)
    client.post(f"/books/{second}/rent", headers=OTHER_MEMBER)

    assert client.get("/loans").status_code == 422

    everything = client.get("/loans", headers=LIBRARIAN).json()
    assert set(everything) == {"Aspiring Developer", "Bookworm"}

    own = client.get("/loans", headers=MEMBER).json()
    assert list(own) == ["Aspiring Developer"]
    assert own["Aspiring Developer"]["book_id"] == first


def test_added_book_keeps_published_date(client):
    payload = {"title": "TS Grammar", "author": "Kang Changmin", "published_date": "2024-07-01T04:03:12"}
    response = client.post("/books", headers=LIBRARIAN, json=payload)

    assert response.status_code == 200
    assert response.json()["published_date"].startswith("2024-07-01T04:03:12")
