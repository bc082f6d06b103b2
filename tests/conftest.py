import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from backend.toolpanel.main import create_app
from backend.toolpanel.store import FileStore


def make_image_bytes(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    """Render a solid-colour image of the given size into encoded bytes."""
    color = (200, 40, 40, 128) if mode == "RGBA" else (200, 40, 40)
    image = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture(name="app")
def app_fixture():
    return create_app()


@pytest.fixture(name="client")
def client_fixture(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture(name="store")
def store_fixture(app) -> FileStore:
    """The in-memory store backing the client fixture's app"""
    return app.state.file_store


@pytest.fixture(name="upload")
def upload_fixture(client: TestClient):
    """Upload (name, content, content_type) tuples and return the created records"""

    def _upload(*files):
        response = client.post(
            "/files/upload",
            files=[("files", (name, content, content_type)) for name, content, content_type in files],
        )
        assert response.status_code == 200, response.text
        return response.json()["files"]

    return _upload
