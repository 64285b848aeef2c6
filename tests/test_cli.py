import json

import pytest

from imagedetail.__main__ import main
from imagedetail.config import ConfigManager
from imagedetail.web.cli import parse_arguments


@pytest.fixture(autouse=True)
def no_config_search(monkeypatch):
    monkeypatch.setattr(ConfigManager, "_find_config_file", staticmethod(lambda: None))
    monkeypatch.delenv("PORT", raising=False)


def test_cli_prints_summary(camera_jpeg, capsys):
    exit_code = main([str(camera_jpeg), "--no-stats"])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["clean"]["FileName"] == "camera.jpg"
    assert data["clean"]["Make"] == "Canon"
    assert "image" not in data


def test_cli_handles_multiple_files_and_failures(camera_jpeg, tmp_path, capsys):
    bad = tmp_path / "bad.jpg"
    bad.write_bytes(b"nope")

    exit_code = main([str(camera_jpeg), str(bad)])

    assert exit_code == 1
    data = json.loads(capsys.readouterr().out)
    assert len(data) == 2
    assert data[0]["image"]["width"] == 64
    assert data[1]["error"] == "Image read failed"


def test_web_cli_arguments():
    args = parse_arguments(["--port", "8080", "--host", "0.0.0.0", "--verbose"])

    assert args.port == 8080
    assert args.host == "0.0.0.0"
    assert args.verbose is True
    assert args.config is None
