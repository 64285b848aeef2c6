import io

from imagedetail.web import create_app


def _upload(client, path, filename="photo.jpg"):
    return client.post(
        "/upload",
        data={"image": (io.BytesIO(path.read_bytes()), filename)},
        content_type="multipart/form-data",
    )


def test_liveness(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_upload_returns_summary(client, config, camera_jpeg, tmp_path):
    response = _upload(client, camera_jpeg)

    assert response.status_code == 200
    data = response.get_json()
    assert data["clean"]["FileName"] == "photo.jpg"
    assert data["clean"]["Make"] == "Canon"
    assert data["clean"]["Model"] == "Canon EOS R6"
    assert data["clean"]["MIMEType"] == "image/jpeg"
    assert data["clean"]["FileSizeMB"] == "0.00"
    assert data["raw"]["Software"] == "Firmware 1.2"
    assert data["raw"]["ModifyDate"] == "2026:01:09 21:17:55"
    assert "Make" not in data["raw"]
    assert data["image"]["width"] == 64
    assert data["image"]["brightness"] == "Normal"
    assert data["note"].startswith("Camera metadata found")


def test_upload_of_stripped_image_notes_missing_metadata(client, stripped_jpeg):
    response = _upload(client, stripped_jpeg, filename="whatsapp.jpg")

    assert response.status_code == 200
    data = response.get_json()
    assert data["analysis"] == {}
    assert "stripped" in data["note"]


def test_temporary_upload_is_removed(client, config, camera_jpeg, tmp_path):
    _upload(client, camera_jpeg)

    upload_dir = tmp_path / "uploads"
    assert upload_dir.exists()
    assert list(upload_dir.iterdir()) == []


def test_missing_file_is_rejected(client):
    response = client.post("/upload", data={}, content_type="multipart/form-data")

    assert response.status_code == 400
    assert "error" in response.get_json()


def test_unreadable_image_is_a_server_error_and_cleaned_up(client, tmp_path):
    response = client.post(
        "/upload",
        data={"image": (io.BytesIO(b"definitely not an image"), "fake.jpg")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 500
    data = response.get_json()
    assert data["error"] == "Image read failed"
    assert data["message"]
    assert list((tmp_path / "uploads").iterdir()) == []


def test_pixel_stats_can_be_disabled(config, camera_jpeg):
    config.set("analysis.pixel_stats", False)
    client = create_app(config=config).test_client()

    data = _upload(client, camera_jpeg).get_json()

    assert "image" not in data
    assert data["clean"]["ImageWidth"] == 64


def test_custom_field_name(config, camera_jpeg):
    config.set("upload.field_name", "file")
    client = create_app(config=config).test_client()

    response = client.post(
        "/upload",
        data={"file": (io.BytesIO(camera_jpeg.read_bytes()), "photo.jpg")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200


def test_oversized_upload_is_rejected(config):
    config.set("upload.max_size_mb", 0.001)
    client = create_app(config=config).test_client()

    response = client.post(
        "/upload",
        data={"image": (io.BytesIO(b"\0" * 5000), "big.jpg")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 413
    assert response.get_json()["error"] == "File too large"


def test_cors_headers_present(client):
    response = client.get("/", headers={"Origin": "http://example.com"})

    assert response.headers.get("Access-Control-Allow-Origin") == "*"


def test_cors_echoes_configured_origin(config):
    config.set("server.cors_origins", ["http://allowed.example"])
    client = create_app(config=config).test_client()

    allowed = client.get("/", headers={"Origin": "http://allowed.example"})
    other = client.get("/", headers={"Origin": "http://other.example"})

    assert allowed.headers["Access-Control-Allow-Origin"] == "http://allowed.example"
    assert "Access-Control-Allow-Origin" not in other.headers
