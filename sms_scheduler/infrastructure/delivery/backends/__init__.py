from .simulated import SimulatedSmsBackend
from .sns import SnsSmsBackend
from .twilio import TwilioSmsBackend

__all__ = ["SimulatedSmsBackend", "SnsSmsBackend", "TwilioSmsBackend"]
