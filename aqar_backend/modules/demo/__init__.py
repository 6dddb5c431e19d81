"""Demo mode: canonical seed graph and periodic reset."""

from .scheduler import DemoResetScheduler, ResetState
from .seed import seed_if_needed

__all__ = [
    "DemoResetScheduler",
    "ResetState",
    "seed_if_needed",
]
