from .backends import SimulatedSmsBackend, SnsSmsBackend, TwilioSmsBackend
from .client import RetryingDeliveryClient
from .factory import DeliveryBackendFactory
from .rate_gate import FixedIntervalRateGate

__all__ = [
    "DeliveryBackendFactory",
    "FixedIntervalRateGate",
    "RetryingDeliveryClient",
    "SimulatedSmsBackend",
    "SnsSmsBackend",
    "TwilioSmsBackend",
]
