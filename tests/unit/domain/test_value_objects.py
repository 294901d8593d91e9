from datetime import UTC, datetime, timedelta, timezone

import pytest

from sms_scheduler.domain.exceptions import ValidationError
from sms_scheduler.domain.value_objects import (
    MAX_BODY_LENGTH,
    MessageBody,
    ensure_future,
    parse_schedule_time,
)


class TestMessageBody:
    def test_create_valid_body(self):
        body = MessageBody(text="Hello, World!")

        assert body.text == "Hello, World!"
        assert str(body) == "Hello, World!"

    def test_empty_body_raises_error(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            MessageBody(text="")

    def test_whitespace_body_raises_error(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            MessageBody(text="   \n ")

    def test_body_at_max_length(self):
        body = MessageBody(text="x" * MAX_BODY_LENGTH)

        assert len(body.text) == MAX_BODY_LENGTH

    def test_body_too_long_raises_error(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            MessageBody(text="x" * (MAX_BODY_LENGTH + 1))

    def test_body_is_immutable(self):
        body = MessageBody(text="Original")

        with pytest.raises(AttributeError):
            body.text = "Modified"


class TestParseScheduleTime:
    def test_parses_zulu_suffix(self):
        parsed = parse_schedule_time("2026-03-01T09:30:00Z")

        assert parsed == datetime(2026, 3, 1, 9, 30, tzinfo=UTC)

    def test_converts_offset_to_utc(self):
        parsed = parse_schedule_time("2026-03-01T11:30:00+02:00")

        assert parsed == datetime(2026, 3, 1, 9, 30, tzinfo=UTC)
        assert parsed.tzinfo == UTC

    def test_accepts_aware_datetime(self):
        value = datetime(2026, 3, 1, 4, 30, tzinfo=timezone(timedelta(hours=-5)))

        assert parse_schedule_time(value) == datetime(2026, 3, 1, 9, 30, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["2026-03-01T09:30:00", datetime(2026, 3, 1, 9, 30)])
    def test_naive_timestamp_raises_error(self, value):
        with pytest.raises(ValidationError, match="UTC offset"):
            parse_schedule_time(value)

    @pytest.mark.parametrize("value", ["tomorrow", "", "2026-13-01T00:00:00Z"])
    def test_unparseable_timestamp_raises_error(self, value):
        with pytest.raises(ValidationError, match="ISO 8601"):
            parse_schedule_time(value)


class TestEnsureFuture:
    def test_future_time_passes(self, clock):
        ensure_future(clock() + timedelta(seconds=1), clock())

    def test_now_is_not_future(self, clock):
        with pytest.raises(ValidationError):
            ensure_future(clock(), clock())
