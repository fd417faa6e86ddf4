import asyncio

import cloudinary
import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError

from dating_app.core.config import Settings
from dating_app.core.exceptions import UnsupportedType, UpstreamFailure, ValidationError
from dating_app.main import app
from dating_app.services.media_service import MediaRelay, get_media_relay

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
SECURE_URL = "https://res.cloudinary.com/demo/image/upload/v1/dating_app_images/abc.png"


def cloudinary_settings(**overrides):
    values = {
        "CLOUDINARY_CLOUD_NAME": "demo",
        "CLOUDINARY_API_KEY": "key123",
        "CLOUDINARY_API_SECRET": "shh",
        "UPLOAD_MAX_BYTES": 1024,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def uploads(monkeypatch):
    """Replace the SDK uploader; set ``result`` or ``error`` to steer it."""
    state = {"calls": [], "result": {"secure_url": SECURE_URL}, "error": None}

    def fake_upload(file, **options):
        state["calls"].append({"data": file.read(), "options": options})
        if state["error"] is not None:
            raise state["error"]
        return state["result"]

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return state


def test_relay_configures_sdk_from_settings():
    MediaRelay(config=cloudinary_settings())

    sdk_config = cloudinary.config()
    assert sdk_config.cloud_name == "demo"
    assert sdk_config.api_key == "key123"
    assert sdk_config.api_secret == "shh"


def test_relay_uploads_and_returns_secure_url(uploads):
    url = asyncio.run(MediaRelay(config=cloudinary_settings()).upload(PNG_BYTES, "image/png", "pic.png"))

    assert url == SECURE_URL
    call = uploads["calls"][0]
    assert call["data"] == PNG_BYTES
    assert call["options"]["folder"] == "dating_app_images"
    assert call["options"]["resource_type"] == "auto"
    assert call["options"]["filename"] == "pic.png"


def test_relay_rejects_non_images(uploads):
    relay = MediaRelay(config=cloudinary_settings())

    with pytest.raises(UnsupportedType):
        asyncio.run(relay.upload(b"hello", "text/plain"))
    with pytest.raises(UnsupportedType):
        asyncio.run(relay.upload(b"hello", None))
    assert uploads["calls"] == []


def test_relay_rejects_empty_and_oversized_payloads(uploads):
    relay = MediaRelay(config=cloudinary_settings())

    with pytest.raises(ValidationError):
        asyncio.run(relay.upload(b"", "image/png"))
    with pytest.raises(ValidationError):
        asyncio.run(relay.upload(b"x" * 2048, "image/png"))
    assert uploads["calls"] == []


def test_relay_sdk_error_is_upstream_failure(uploads):
    uploads["error"] = CloudinaryError("Invalid Signature")

    with pytest.raises(UpstreamFailure, match="Invalid Signature"):
        asyncio.run(MediaRelay(config=cloudinary_settings()).upload(PNG_BYTES, "image/png"))


def test_relay_missing_secure_url(uploads):
    uploads["result"] = {"public_id": "abc"}

    with pytest.raises(UpstreamFailure, match="secure_url"):
        asyncio.run(MediaRelay(config=cloudinary_settings()).upload(PNG_BYTES, "image/png"))


def test_relay_not_configured(uploads):
    relay = MediaRelay(config=cloudinary_settings(CLOUDINARY_CLOUD_NAME="", CLOUDINARY_API_KEY=""))

    with pytest.raises(UpstreamFailure, match="not configured"):
        asyncio.run(relay.upload(PNG_BYTES, "image/png"))
    assert uploads["calls"] == []


def test_upload_endpoint_success(client, uploads):
    app.dependency_overrides[get_media_relay] = lambda: MediaRelay(config=cloudinary_settings())

    response = client.post("/api/upload/image", files={"image": ("pic.png", PNG_BYTES, "image/png")})

    assert response.status_code == 200
    assert response.json() == {"message": "Image uploaded successfully!", "image_url": SECURE_URL}


def test_upload_endpoint_requires_file(client, uploads):
    app.dependency_overrides[get_media_relay] = lambda: MediaRelay(config=cloudinary_settings())

    response = client.post("/api/upload/image", data={"other": "field"})

    assert response.status_code == 400
    assert response.json()["detail"] == "No image file uploaded."


def test_upload_endpoint_rejects_non_images(client, uploads):
    app.dependency_overrides[get_media_relay] = lambda: MediaRelay(config=cloudinary_settings())

    response = client.post("/api/upload/image", files={"image": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid file type. Only image files are allowed!"


def test_upload_endpoint_upstream_failure_is_json_500(client, uploads):
    uploads["error"] = CloudinaryError("boom")
    app.dependency_overrides[get_media_relay] = lambda: MediaRelay(config=cloudinary_settings())

    response = client.post("/api/upload/image", files={"image": ("pic.png", PNG_BYTES, "image/png")})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert "Cloudinary upload failed" in response.json()["detail"]
