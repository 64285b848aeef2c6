from datetime import datetime, timezone

from imagedetail.metadata import format_capture_time, parse_capture_time, resolve_capture_time

ALL_CANDIDATES = {
    "SubSecDateTimeOriginal": "2026:01:09 21:17:55.123",
    "DateTimeOriginal": "2025:02:03 04:05:06",
    "CreateDate": "2024:12:25 13:30:00",
    "GPSDateTime": "2023:07:08 00:15:42Z",
}


def test_format_uses_twelve_hour_clock():
    assert format_capture_time(datetime(2026, 1, 9, 21, 17, 55)) == "1/9/2026, 9:17:55 PM"
    assert format_capture_time(datetime(2026, 1, 9, 0, 5, 0)) == "1/9/2026, 12:05:00 AM"
    assert format_capture_time(datetime(2026, 12, 31, 12, 0, 7)) == "12/31/2026, 12:00:07 PM"


def test_date_time_original_is_formatted():
    raw = {"DateTimeOriginal": "2026:01:09 21:17:55"}
    assert resolve_capture_time(raw) == "1/9/2026, 9:17:55 PM"


def test_sub_second_original_wins_over_everything():
    assert resolve_capture_time(ALL_CANDIDATES) == "1/9/2026, 9:17:55 PM"


def test_priority_falls_through_in_fixed_order():
    raw = dict(ALL_CANDIDATES)

    del raw["SubSecDateTimeOriginal"]
    assert resolve_capture_time(raw) == "2/3/2025, 4:05:06 AM"

    del raw["DateTimeOriginal"]
    assert resolve_capture_time(raw) == "12/25/2024, 1:30:00 PM"

    del raw["CreateDate"]
    assert resolve_capture_time(raw) == "7/8/2023, 12:15:42 AM"

    del raw["GPSDateTime"]
    assert resolve_capture_time(raw) is None


def test_sentinel_candidate_is_skipped():
    raw = {
        "DateTimeOriginal": "0000:00:00 00:00:00",
        "CreateDate": "2024:12:25 13:30:00",
    }
    assert resolve_capture_time(raw) == "12/25/2024, 1:30:00 PM"


def test_unparseable_candidate_is_skipped():
    raw = {
        "SubSecDateTimeOriginal": "not a date",
        "DateTimeOriginal": "2026:13:45 99:00:00",
        "CreateDate": "20241225",
        "GPSDateTime": "2023:07:08 00:15:42Z",
    }
    assert resolve_capture_time(raw) == "7/8/2023, 12:15:42 AM"


def test_epoch_seconds_are_converted_to_local_time():
    expected = format_capture_time(datetime.fromtimestamp(1_767_993_475))
    assert resolve_capture_time({"DateTimeOriginal": 1_767_993_475}) == expected


def test_placeholder_epoch_is_rejected():
    assert resolve_capture_time({"DateTimeOriginal": 0}) is None
    assert resolve_capture_time({"DateTimeOriginal": 999_999_999}) is None


def test_offset_timestamps_are_shown_in_local_time():
    moment = datetime(2026, 1, 9, 21, 17, 55, tzinfo=timezone.utc).astimezone()
    raw = {"SubSecDateTimeOriginal": "2026:01:09 21:17:55.50+00:00"}
    assert resolve_capture_time(raw) == format_capture_time(moment)


def test_datetime_instances_pass_through():
    assert parse_capture_time(datetime(2026, 1, 9, 21, 17, 55)) == datetime(2026, 1, 9, 21, 17, 55)


def test_unsupported_types_are_rejected():
    assert parse_capture_time(True) is None
    assert parse_capture_time([2026, 1, 9]) is None
    assert parse_capture_time(None) is None


def test_no_candidates_gives_none():
    assert resolve_capture_time({}) is None
    assert resolve_capture_time({"ModifyDate": "2026:01:09 21:17:55"}) is None
