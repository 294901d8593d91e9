from datetime import UTC, datetime

from ..exceptions import ValidationError


def parse_schedule_time(value: str | datetime) -> datetime:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted. Timestamps without a UTC offset are
    rejected because the intended instant is ambiguous.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(value.strip())
        except (AttributeError, ValueError) as e:
            raise ValidationError("Invalid date format. Use ISO 8601 format.") from e

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ValidationError("Scheduled time must include a UTC offset")
    return parsed.astimezone(UTC)


def ensure_future(scheduled_at: datetime, now: datetime) -> None:
    """Reject schedule times that are not strictly after ``now``."""
    if scheduled_at <= now:
        raise ValidationError("Scheduled time must be in the future")
