from pathlib import Path

import pytest
from PIL import Image

from imagedetail.config import ConfigManager
from imagedetail.web import create_app

MAKE = 0x010F
MODEL = 0x0110
SOFTWARE = 0x0131
DATETIME = 0x0132


def make_jpeg(path: Path, size=(64, 48), color=(120, 120, 120), exif_tags=None) -> Path:
    img = Image.new("RGB", size, color)
    if exif_tags:
        exif = Image.Exif()
        for tag, value in exif_tags.items():
            exif[tag] = value
        img.save(path, "JPEG", exif=exif)
    else:
        img.save(path, "JPEG")
    return path


@pytest.fixture
def camera_jpeg(tmp_path):
    return make_jpeg(
        tmp_path / "camera.jpg",
        exif_tags={
            MAKE: "Canon",
            MODEL: "Canon EOS R6",
            SOFTWARE: "Firmware 1.2",
            DATETIME: "2026:01:09 21:17:55",
        },
    )


@pytest.fixture
def stripped_jpeg(tmp_path):
    return make_jpeg(tmp_path / "stripped.jpg")


@pytest.fixture
def config(tmp_path):
    config = ConfigManager.defaults()
    config.set("upload.directory", str(tmp_path / "uploads"))
    return config


@pytest.fixture
def client(config):
    app = create_app(config=config)
    app.config["TESTING"] = True
    return app.test_client()
