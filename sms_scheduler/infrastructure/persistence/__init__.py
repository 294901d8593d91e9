from .database import Database
from .message_repository import SqlAlchemyMessageRepository
from .models import Base, ScheduledMessageModel

__all__ = ["Base", "Database", "ScheduledMessageModel", "SqlAlchemyMessageRepository"]
