from datetime import datetime, timedelta, timezone

import pytest

from task_api.errors import InvalidFieldError, MissingFieldError
from task_api.validation import parse_due_datetime, to_iso_instant, validate_task_create


def make_payload(**overrides):
    payload = {
        "title": "Test",
        "description": "Some description",
        "status": "pending",
        "due_datetime": "2024-12-31T10:00:00.000Z",
    }
    payload.update(overrides)
    return payload


class TestPresence:
    @pytest.mark.parametrize("field", ["title", "description", "status", "due_datetime"])
    def test_missing_single_field(self, field):
        payload = make_payload()
        del payload[field]
        with pytest.raises(MissingFieldError) as exc:
            validate_task_create(payload)
        assert exc.value.field == field
        assert field in exc.value.message

    @pytest.mark.parametrize("empty", [None, ""])
    def test_null_and_empty_count_as_missing(self, empty):
        with pytest.raises(MissingFieldError) as exc:
            validate_task_create(make_payload(status=empty))
        assert exc.value.field == "status"

    def test_first_missing_field_wins(self):
        with pytest.raises(MissingFieldError) as exc:
            validate_task_create({"status": "pending"})
        assert exc.value.field == "title"

        with pytest.raises(MissingFieldError) as exc:
            validate_task_create({"title": "Test"})
        assert exc.value.field == "description"

    def test_none_payload_reports_title(self):
        with pytest.raises(MissingFieldError) as exc:
            validate_task_create(None)
        assert exc.value.field == "title"

    def test_presence_checked_before_shape(self):
        # Invalid title would fail later, but the missing due_datetime is reported first
        with pytest.raises(MissingFieldError) as exc:
            validate_task_create(make_payload(title="a" * 101, due_datetime=None))
        assert exc.value.field == "due_datetime"


class TestFieldRules:
    def test_title_at_limit_is_accepted(self):
        assert validate_task_create(make_payload(title="a" * 100))["title"] == "a" * 100

    @pytest.mark.parametrize("length", [101, 150, 500])
    def test_title_too_long(self, length):
        with pytest.raises(InvalidFieldError) as exc:
            validate_task_create(make_payload(title="a" * length))
        assert exc.value.field == "title"
        assert exc.value.status_code == 400
        assert exc.value.reason == "too long"

    @pytest.mark.parametrize("description", ["a", "abc", "four"])
    def test_description_too_short(self, description):
        with pytest.raises(InvalidFieldError) as exc:
            validate_task_create(make_payload(description=description))
        assert exc.value.field == "description"
        assert exc.value.reason == "too short"

    def test_description_of_five_characters_is_accepted(self):
        assert validate_task_create(make_payload(description="abcde"))["description"] == "abcde"

    def test_title_checked_before_description(self):
        with pytest.raises(InvalidFieldError) as exc:
            validate_task_create(make_payload(title="a" * 101, description="abc"))
        assert exc.value.field == "title"

    @pytest.mark.parametrize("status", ["pending", "in_progress", "completed"])
    def test_allowed_statuses(self, status):
        assert validate_task_create(make_payload(status=status))["status"] == status

    @pytest.mark.parametrize("status", ["SOMETHING_ELSE", "Pending", " pending", "done", "in-progress"])
    def test_invalid_status(self, status):
        with pytest.raises(InvalidFieldError) as exc:
            validate_task_create(make_payload(status=status))
        assert exc.value.field == "status"
        assert exc.value.reason == "invalid value"

    def test_status_checked_before_date(self):
        with pytest.raises(InvalidFieldError) as exc:
            validate_task_create(make_payload(status="nope", due_datetime="invalid-date"))
        assert exc.value.field == "status"

    def test_non_string_field(self):
        with pytest.raises(InvalidFieldError) as exc:
            validate_task_create(make_payload(title=123))
        assert exc.value.field == "title"
        assert exc.value.reason == "must be a string"


class TestDueDatetime:
    @pytest.mark.parametrize(
        "value",
        ["invalid-date", "2024-13-01T00:00:00Z", "2024-02-30", "31/12/2024", "tomorrow", "2024-12-31T25:00:00Z"],
    )
    def test_unparseable_dates_are_rejected(self, value):
        with pytest.raises(InvalidFieldError) as exc:
            validate_task_create(make_payload(due_datetime=value))
        assert exc.value.field == "due_datetime"
        assert exc.value.reason == "invalid date format"

    def test_normalizes_utc_input_unchanged(self):
        result = validate_task_create(make_payload())
        assert result["due_datetime"] == "2024-12-31T10:00:00.000Z"

    def test_normalizes_offset_to_utc(self):
        assert parse_due_datetime("2024-12-31T12:30:00+02:00") == "2024-12-31T10:30:00.000Z"

    def test_date_only_is_midnight_utc(self):
        assert parse_due_datetime("2025-02-01") == "2025-02-01T00:00:00.000Z"

    def test_naive_datetime_is_taken_as_utc(self):
        assert parse_due_datetime("2025-02-02T09:30:00") == "2025-02-02T09:30:00.000Z"

    def test_milliseconds_are_kept(self):
        assert parse_due_datetime("2025-02-02T09:30:00.123456Z") == "2025-02-02T09:30:00.123Z"

    def test_years_before_1000_are_zero_padded(self):
        assert parse_due_datetime("0005-01-01T00:00:00Z") == "0005-01-01T00:00:00.000Z"
        assert to_iso_instant(datetime(999, 6, 1, 8, 0, tzinfo=timezone.utc)) == "0999-06-01T08:00:00.000Z"

    def test_to_iso_instant(self):
        tz = timezone(timedelta(hours=-5))
        assert to_iso_instant(datetime(2024, 12, 31, 5, 0, tzinfo=tz)) == "2024-12-31T10:00:00.000Z"


def test_valid_payload_is_returned_normalized():
    assert validate_task_create(make_payload(due_datetime="2024-12-31T11:00:00+01:00")) == {
        "title": "Test",
        "description": "Some description",
        "status": "pending",
        "due_datetime": "2024-12-31T10:00:00.000Z",
    }
