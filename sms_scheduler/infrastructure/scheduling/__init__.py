from .poll_scheduler import PollScheduler, TickReport

__all__ = ["PollScheduler", "TickReport"]
