"""
Request pacing.

The import never retries; it only spaces out outbound calls with fixed
delays. A Pacer is the callable that performs the wait, so tests can inject
one that never sleeps.
"""

import time
from typing import Callable


class Pacer:
    """
    Fixed-delay wait strategy.

    Usage:
        pace = Pacer()
        pace(0.5)   # sleeps half a second
        Pacer(enabled=False)(0.5)   # returns immediately
    """

    def __init__(self, enabled: bool = True, sleep: Callable[[float], None] = time.sleep):
        self.enabled = enabled
        self._sleep = sleep
        self.total_waited = 0.0

    def __call__(self, seconds: float) -> None:
        if not self.enabled or seconds <= 0:
            return
        self._sleep(seconds)
        self.total_waited += seconds


def no_delay() -> Pacer:
    """Pacer that never sleeps."""
    return Pacer(enabled=False)
