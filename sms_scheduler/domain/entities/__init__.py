from .message import MessageStatus, ScheduledMessage, normalize_status

__all__ = ["MessageStatus", "ScheduledMessage", "normalize_status"]
