from .message_body import MAX_BODY_LENGTH, MessageBody
from .schedule_time import ensure_future, parse_schedule_time

__all__ = ["MAX_BODY_LENGTH", "MessageBody", "ensure_future", "parse_schedule_time"]
