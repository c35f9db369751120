from __future__ import annotations

import base64
from collections.abc import Iterator
from io import BytesIO

import pytest
from flask.testing import FlaskClient
from PIL import Image

from files_manager.app import create_app
from files_manager.infrastructure.container import container

pytestmark = pytest.mark.usefixtures("reset_database")


def _png(width: int, height: int) -> str:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color=(10, 120, 200)).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode()


def _login(client: FlaskClient, email: str) -> dict[str, str]:
    client.post("/users", json={"email": email, "password": "pw"})
    raw = base64.b64encode(f"{email}:pw".encode()).decode()
    token = client.get("/connect", headers={"Authorization": f"Basic {raw}"}).get_json()["token"]
    return {"X-Token": token}


@pytest.fixture()
def client() -> Iterator[FlaskClient]:
    app = create_app()
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def owner(client: FlaskClient) -> dict[str, str]:
    return _login(client, "owner@example.com")


@pytest.fixture()
def stranger(client: FlaskClient) -> dict[str, str]:
    return _login(client, "stranger@example.com")


def test_plain_file_scenario(client, owner, stranger) -> None:
    created = client.post(
        "/files", json={"name": "a.txt", "type": "file", "data": "aGVsbG8="}, headers=owner
    )

    assert created.status_code == 201
    body = created.get_json()
    assert body["isPublic"] is False
    assert body["parentId"] == 0
    assert body["type"] == "file"
    assert "localPath" not in body

    data = client.get(f"/files/{body['id']}/data", headers=owner)
    assert data.status_code == 200
    assert data.data == b"hello"
    assert data.mimetype == "text/plain"

    assert client.get(f"/files/{body['id']}/data").status_code == 404
    assert client.get(f"/files/{body['id']}/data", headers=stranger).status_code == 404


def test_upload_requires_token(client) -> None:
    response = client.post("/files", json={"name": "a.txt", "type": "file", "data": "aGVsbG8="})

    assert response.status_code == 401


@pytest.mark.parametrize(
    ("payload", "code"),
    [
        ({}, "missing_name"),
        ({"name": "a"}, "missing_type"),
        ({"name": "a", "type": "file"}, "missing_data"),
        ({"name": "a", "type": "file", "data": "%%%"}, "invalid_data"),
        ({"name": "a", "type": "file", "data": "aGVsbG8=", "parentId": 77}, "parent_not_found"),
    ],
)
def test_upload_validation_errors(client, owner, payload, code) -> None:
    response = client.post("/files", json=payload, headers=owner)

    assert response.status_code == 400
    assert response.get_json()["error"] == code


def test_upload_with_non_integer_parent_is_rejected(client, owner) -> None:
    response = client.post(
        "/files",
        json={"name": "a", "type": "file", "data": "aGVsbG8=", "parentId": "abc"},
        headers=owner,
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"
    assert response.get_json()["context"]["fields"] == ["parentId"]


@pytest.mark.parametrize(
    "payload",
    [{"parentId": "abc"}, {"isPublic": None}, {"type": 5}, ["not", "an", "object"]],
)
def test_upload_authenticates_before_reading_body(client, payload) -> None:
    response = client.post("/files", json=payload)

    assert response.status_code == 401


def test_upload_reports_missing_name_before_bad_parent(client, owner) -> None:
    response = client.post("/files", json={"parentId": "abc"}, headers=owner)

    assert response.status_code == 400
    assert response.get_json()["error"] == "missing_name"


def test_upload_rejects_non_boolean_visibility(client, owner) -> None:
    response = client.post(
        "/files",
        json={"name": "a", "type": "folder", "isPublic": "yes"},
        headers=owner,
    )

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["isPublic"]


def test_folder_content_is_invalid_operation(client, owner) -> None:
    folder = client.post("/files", json={"name": "box", "type": "folder"}, headers=owner)

    response = client.get(f"/files/{folder.get_json()['id']}/data")

    assert response.status_code == 400
    assert response.get_json()["error"] == "folder_has_no_content"
    assert response.get_json()["kind"] == "invalid_operation"


def test_show_publish_unpublish(client, owner, stranger) -> None:
    file_id = client.post(
        "/files", json={"name": "a.txt", "type": "file", "data": "aGVsbG8="}, headers=owner
    ).get_json()["id"]

    original = client.get(f"/files/{file_id}", headers=owner).get_json()
    assert client.get(f"/files/{file_id}").status_code == 404
    assert client.put(f"/files/{file_id}/publish", headers=stranger).status_code == 404
    assert client.put(f"/files/{file_id}/publish").status_code == 404

    published = client.put(f"/files/{file_id}/publish", headers=owner)
    assert published.status_code == 200
    assert published.get_json() == {**original, "isPublic": True}
    assert client.get(f"/files/{file_id}").status_code == 200
    assert client.get(f"/files/{file_id}/data").data == b"hello"

    unpublished = client.put(f"/files/{file_id}/unpublish", headers=owner)
    assert unpublished.get_json() == original
    assert client.get(f"/files/{file_id}", headers=stranger).status_code == 404


def test_missing_record_is_not_found(client, owner) -> None:
    response = client.get("/files/9999", headers=owner)

    assert response.status_code == 404
    assert response.get_json() == {"error": "not_found", "kind": "not_found"}


def test_listing_pages_through_folder(client, owner) -> None:
    folder_id = client.post(
        "/files", json={"name": "box", "type": "folder"}, headers=owner
    ).get_json()["id"]
    names = [f"f{i:02d}.txt" for i in range(25)]
    for name in names:
        client.post(
            "/files",
            json={"name": name, "type": "file", "data": "aGVsbG8=", "parentId": folder_id},
            headers=owner,
        )

    second = client.get(f"/files?parentId={folder_id}&page=1", headers=owner)

    assert second.status_code == 200
    assert [item["name"] for item in second.get_json()] == names[20:]
    root = client.get("/files", headers=owner).get_json()
    assert [item["id"] for item in root] == [folder_id]


def test_listing_rejects_bad_query(client, owner) -> None:
    bad_page = client.get("/files?page=abc", headers=owner)
    negative = client.get("/files?page=-1", headers=owner)

    assert bad_page.status_code == 400
    assert bad_page.get_json()["kind"] == "validation_error"
    assert negative.status_code == 400
    assert negative.get_json()["error"] == "invalid_page"


def test_image_thumbnails_appear_after_worker_runs(client, owner) -> None:
    created = client.post(
        "/files",
        json={"name": "pic.png", "type": "image", "data": _png(400, 200), "isPublic": True},
        headers=owner,
    )
    file_id = created.get_json()["id"]

    assert client.get(f"/files/{file_id}/data?size=100").status_code == 404

    assert container.thumbnail_worker_pool.drain() == 1

    thumb = client.get(f"/files/{file_id}/data?size=100")
    assert thumb.status_code == 200
    assert thumb.mimetype == "image/png"
    with Image.open(BytesIO(thumb.data)) as image:
        assert image.size == (100, 50)

    original = client.get(f"/files/{file_id}/data?size=42")
    with Image.open(BytesIO(original.data)) as image:
        assert image.size == (400, 200)


def test_status_and_stats(client, owner) -> None:
    client.post("/files", json={"name": "box", "type": "folder"}, headers=owner)

    status = client.get("/status")
    stats = client.get("/stats")

    assert status.get_json() == {"db": True, "queue": True}
    assert stats.get_json() == {"users": 1, "files": 1}
    assert status.headers["X-Content-Type-Options"] == "nosniff"
