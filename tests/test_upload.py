"""
Upload tests. The Cloudinary SDK is patched; nothing leaves the process.
"""

import io
from unittest.mock import MagicMock, patch

from catalogdash.core import storage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _upload(client, content=PNG_BYTES, filename="photo.png", content_type="image/png"):
    return client.post(
        "/api/upload",
        data={"file": (io.BytesIO(content), filename, content_type)},
        content_type="multipart/form-data",
    )


# ---------------------------------------------------------------------------
# 1. Media host wrapper
# ---------------------------------------------------------------------------

def test_upload_image_uses_folder_and_transformation(app):
    result = {"secure_url": "https://res.cloudinary.com/test-cloud/image/upload/x.png", "public_id": "ecommerce-dashboard/products/x"}

    with app.app_context(), patch.object(storage.cloudinary.uploader, "upload", return_value=result) as upload:
        uploaded = storage.upload_image("data:image/png;base64,AAAA")

    assert uploaded == {
        "url": "https://res.cloudinary.com/test-cloud/image/upload/x.png",
        "publicId": "ecommerce-dashboard/products/x",
    }
    upload.assert_called_once_with(
        "data:image/png;base64,AAAA",
        folder="ecommerce-dashboard/products",
        transformation=[{"width": 800, "height": 800, "crop": "limit"}],
    )


def test_delete_image(app):
    with app.app_context(), patch.object(storage.cloudinary.uploader, "destroy") as destroy:
        assert storage.delete_image("ecommerce-dashboard/products/x") is True
        assert storage.delete_image("") is False

    destroy.assert_called_once_with("ecommerce-dashboard/products/x")


def test_file_to_data_uri():
    file_storage = MagicMock(mimetype="image/png")
    file_storage.read.return_value = b"abc"
    assert storage.file_to_data_uri(file_storage) == "data:image/png;base64,YWJj"


# ---------------------------------------------------------------------------
# 2. POST /api/upload
# ---------------------------------------------------------------------------

def test_upload_returns_url_and_public_id(admin, login_as):
    client = login_as(admin)
    hosted = {"url": "https://res.cloudinary.com/test-cloud/image/upload/p.png", "publicId": "ecommerce-dashboard/products/p"}

    with patch("catalogdash.modules.upload.routes.upload_image", return_value=hosted) as upload:
        response = _upload(client)

    assert response.status_code == 200
    assert response.get_json() == hosted
    data_uri = upload.call_args.args[0]
    assert data_uri.startswith("data:image/png;base64,")
    assert upload.call_args.kwargs == {"folder": "products"}


def test_upload_without_file(admin, login_as):
    client = login_as(admin)
    response = client.post("/api/upload", data={}, content_type="multipart/form-data")

    assert response.status_code == 400
    assert response.get_json() == {"message": "No file provided"}


def test_upload_rejects_non_images(admin, login_as):
    client = login_as(admin)
    with patch("catalogdash.modules.upload.routes.upload_image") as upload:
        response = _upload(client, content=b"hello", filename="notes.txt", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json() == {"message": "File must be an image"}
    upload.assert_not_called()


def test_upload_media_host_failure(admin, login_as):
    client = login_as(admin)
    with patch("catalogdash.modules.upload.routes.upload_image", side_effect=RuntimeError("cloudinary down")):
        response = _upload(client)

    assert response.status_code == 500
    assert response.get_json() == {"message": "Upload failed"}


def test_upload_too_large(admin, login_as, app):
    app.config["MAX_CONTENT_LENGTH"] = 1024
    client = login_as(admin)
    response = _upload(client, content=b"\x00" * 4096)

    assert response.status_code == 413
    assert response.get_json() == {"message": "File too large"}


def test_upload_requires_auth(client):
    assert _upload(client).status_code == 401
