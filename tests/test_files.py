"""Tests for the batch file management API."""

from fastapi.testclient import TestClient

from backend.toolpanel.core.settings import Settings, get_settings


def test_upload_creates_one_record_per_file(client: TestClient, upload):
    """Uploading N files yields N records with size and type metadata."""
    records = upload(
        ("report.pdf", b"%PDF-1.4 fake", "application/pdf"),
        ("notes.txt", b"hello world", "text/plain"),
        ("photo.png", b"\x89PNG....", "image/png"),
    )

    assert len(records) == 3
    assert [record["name"] for record in records] == ["report.pdf", "notes.txt", "photo.png"]
    assert [record["size"] for record in records] == [13, 11, 8]
    assert [record["type"] for record in records] == ["application/pdf", "text/plain", "image/png"]
    assert all(record["status"] == "ready" for record in records)
    assert len({record["id"] for record in records}) == 3

    listing = client.get("/files").json()["files"]
    assert len(listing) == 3


def test_upload_without_files_is_rejected(client: TestClient):
    response = client.post("/files/upload")
    assert response.status_code == 400
    assert response.json()["detail"] == "No files were uploaded."


def test_ids_stay_unique_across_uploads(client: TestClient, upload):
    first = upload(("a.txt", b"a", "text/plain"), ("b.txt", b"b", "text/plain"))
    second = upload(("c.txt", b"c", "text/plain"))

    ids = [record["id"] for record in first + second]
    assert len(set(ids)) == 3
    assert ids == sorted(ids)


def test_delete_removes_exactly_selected(client: TestClient, upload):
    """Deleting a selected subset removes exactly those records."""
    records = upload(
        ("one.txt", b"1", "text/plain"),
        ("two.txt", b"22", "text/plain"),
        ("three.txt", b"333", "text/plain"),
        ("four.txt", b"4444", "text/plain"),
    )
    doomed = [records[0]["id"], records[2]["id"]]

    response = client.post("/files/delete", json={"ids": doomed})

    assert response.status_code == 200
    body = response.json()
    assert body["affected"] == 2
    assert body["message"] == "Deleted 2 files"
    remaining = [record["id"] for record in client.get("/files").json()["files"]]
    assert remaining == [records[1]["id"], records[3]["id"]]


def test_delete_unknown_id_returns_404(client: TestClient, upload):
    records = upload(("one.txt", b"1", "text/plain"))

    response = client.post("/files/delete", json={"ids": [records[0]["id"], 42]})

    assert response.status_code == 404
    assert "42" in response.json()["detail"]
    assert len(client.get("/files").json()["files"]) == 1


def test_empty_selection_is_rejected(client: TestClient):
    response = client.post("/files/delete", json={"ids": []})
    assert response.status_code == 400
    assert response.json()["detail"] == "No files selected."


def test_rename_uses_prefix_id_and_extension(client: TestClient, upload):
    records = upload(
        ("draft.final.docx", b"doc", "application/vnd.openxmlformats-officedocument"),
        ("README", b"r", "application/octet-stream"),
    )
    ids = [record["id"] for record in records]

    response = client.post("/files/rename", json={"ids": ids, "prefix": "batch"})

    assert response.status_code == 200
    names = [record["name"] for record in response.json()["files"]]
    assert names == [f"batch-{ids[0]}.docx", f"batch-{ids[1]}"]
    assert client.get(f"/files/{ids[0]}").json()["name"] == f"batch-{ids[0]}.docx"


def test_rename_requires_prefix(client: TestClient, upload):
    records = upload(("a.txt", b"a", "text/plain"))
    response = client.post("/files/rename", json={"ids": [records[0]["id"]], "prefix": "   "})
    assert response.status_code == 400


def test_copy_appends_duplicates_with_new_ids(client: TestClient, upload):
    records = upload(("a.txt", b"alpha", "text/plain"))

    response = client.post("/files/copy", json={"ids": [records[0]["id"]]})

    assert response.status_code == 200
    copy = response.json()["files"][0]
    assert copy["id"] != records[0]["id"]
    assert copy["name"] == "a.txt"
    assert copy["size"] == 5
    assert copy["status"] == "copied"
    assert client.get(f"/files/{copy['id']}/download").content == b"alpha"
    assert len(client.get("/files").json()["files"]) == 2


def test_move_sets_folder(client: TestClient, upload):
    records = upload(("a.txt", b"a", "text/plain"), ("b.txt", b"b", "text/plain"))

    response = client.post("/files/move", json={"ids": [records[1]["id"]], "folder": "archive"})

    assert response.status_code == 200
    assert response.json()["message"] == "Moved 1 files to archive"
    moved = client.get(f"/files/{records[1]['id']}").json()
    assert moved["folder"] == "archive"
    assert moved["status"] == "moved"
    assert client.get(f"/files/{records[0]['id']}").json()["folder"] is None


def test_list_filters_documents_and_images(client: TestClient, upload):
    upload(
        ("report.PDF", b"pdf", "application/pdf"),
        ("letter.bin", b"doc", "application/msword-document"),
        ("photo.jpg", b"jpg", "image/jpeg"),
        ("data.csv", b"a,b", "text/csv"),
    )

    documents = [record["name"] for record in client.get("/files", params={"kind": "document"}).json()["files"]]
    images = [record["name"] for record in client.get("/files", params={"kind": "image"}).json()["files"]]

    assert documents == ["report.PDF", "letter.bin"]
    assert images == ["photo.jpg"]


def test_download_returns_payload_as_attachment(client: TestClient, upload):
    records = upload(("notes.txt", b"hello", "text/plain"))

    response = client.get(records[0]["download_url"])

    assert response.status_code == 200
    assert response.content == b"hello"
    assert response.headers["content-disposition"] == 'attachment; filename="notes.txt"'


def test_get_unknown_file_returns_404(client: TestClient):
    assert client.get("/files/123").status_code == 404


def test_text_preview_for_markdown(client: TestClient, upload):
    records = upload(("readme.md", "# Title\nbody".encode("utf-8"), "text/markdown"))

    response = client.get(f"/files/{records[0]['id']}/text")

    assert response.status_code == 200
    assert response.text == "# Title\nbody"


def test_text_preview_unsupported_type(client: TestClient, upload):
    records = upload(("photo.png", b"png", "image/png"))
    assert client.get(f"/files/{records[0]['id']}/text").status_code == 400


def test_health_reports_record_count(client: TestClient, upload):
    upload(("a.txt", b"a", "text/plain"))
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["file_count"] == 1


def test_upload_over_size_cap_is_rejected(app, client: TestClient):
    app.dependency_overrides[get_settings] = lambda: Settings(max_upload_mb=1)
    try:
        response = client.post(
            "/files/upload",
            files=[("files", ("big.bin", b"x" * (1024 * 1024 + 1), "application/octet-stream"))],
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 413
    assert "big.bin" in response.json()["detail"]
    assert client.get("/files").json()["files"] == []


def test_rename_rejects_control_characters(client: TestClient, upload):
    records = upload(("a.txt", b"a", "text/plain"))

    response = client.post("/files/rename", json={"ids": [records[0]["id"]], "prefix": "x\r\nX-Evil: 1"})

    assert response.status_code == 400
    assert client.get(f"/files/{records[0]['id']}").json()["name"] == "a.txt"
    download = client.get(records[0]["download_url"])
    assert "x-evil" not in download.headers


def test_move_rejects_control_characters(client: TestClient, upload):
    records = upload(("a.txt", b"a", "text/plain"))

    response = client.post("/files/move", json={"ids": [records[0]["id"]], "folder": "arch\nive"})

    assert response.status_code == 400
    assert client.get(f"/files/{records[0]['id']}").json()["folder"] is None
