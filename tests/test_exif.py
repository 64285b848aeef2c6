from PIL.TiffImagePlugin import IFDRational

from imagedetail.utils import exif
from imagedetail.utils.exif import extract_metadata, sanitize_value


def test_sanitize_converts_rationals_and_text():
    assert sanitize_value(IFDRational(1, 4)) == 0.25
    assert sanitize_value(b"Canon\x00") == "Canon"
    assert sanitize_value("  Canon EOS R6\x00") == "Canon EOS R6"
    assert sanitize_value((IFDRational(12, 1), IFDRational(34, 1), IFDRational(561, 10))) == [12.0, 34.0, 56.1]
    assert sanitize_value(100) == 100


def test_sanitize_handles_undefined_rationals():
    assert sanitize_value(IFDRational(1, 0)) is None


def test_sanitize_keeps_short_binary_as_bytes_list():
    assert sanitize_value(b"\x02\x02\x00\x00") == [2, 2, 0, 0]


def test_sanitize_drops_binary_blobs():
    assert sanitize_value(b"\xff\xd8" * 100) is exif._SKIP


def test_aliases_rename_to_canonical_names():
    tags = exif._apply_aliases({"DateTimeDigitized": "2026:01:09 21:17:55", "ISOSpeedRatings": 200})
    assert tags == {"CreateDate": "2026:01:09 21:17:55", "ISO": 200}


def test_composite_timestamps():
    tags = {
        "DateTimeOriginal": "2026:01:09 21:17:55",
        "SubsecTimeOriginal": "123",
        "OffsetTimeOriginal": "+05:30",
        "GPSDateStamp": "2026:01:09",
        "GPSTimeStamp": [15.0, 47.0, 55.0],
    }
    exif._add_composites(tags)

    assert tags["SubSecDateTimeOriginal"] == "2026:01:09 21:17:55.123+05:30"
    assert tags["GPSDateTime"] == "2026:01:09 15:47:55Z"


def test_composites_need_both_parts():
    tags = {"DateTimeOriginal": "2026:01:09 21:17:55", "GPSDateStamp": "2026:01:09"}
    exif._add_composites(tags)

    assert "SubSecDateTimeOriginal" not in tags
    assert "GPSDateTime" not in tags


def test_extract_reads_exif_and_image_facts(camera_jpeg):
    metadata = extract_metadata(str(camera_jpeg))

    assert metadata["Make"] == "Canon"
    assert metadata["Model"] == "Canon EOS R6"
    assert metadata["Software"] == "Firmware 1.2"
    assert metadata["ModifyDate"] == "2026:01:09 21:17:55"
    assert "DateTime" not in metadata
    assert metadata["ImageWidth"] == 64
    assert metadata["ImageHeight"] == 48
    assert metadata["Megapixels"] == 0.0
    assert metadata["MIMEType"] == "image/jpeg"


def test_extract_without_exif_returns_image_facts_only(stripped_jpeg):
    metadata = extract_metadata(str(stripped_jpeg))

    assert metadata["ImageWidth"] == 64
    assert "Make" not in metadata


def test_extract_missing_file_returns_empty(tmp_path):
    assert extract_metadata(str(tmp_path / "missing.jpg")) == {}


def test_extract_unreadable_file_returns_empty(tmp_path):
    path = tmp_path / "notes.jpg"
    path.write_bytes(b"this is not an image")

    assert extract_metadata(str(path)) == {}
