from . import delivery_status, health, messages

__all__ = ["delivery_status", "health", "messages"]
