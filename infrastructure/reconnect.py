"""Reconnect policy for the Command Channel's background loop.

The default reproduces the renderer bridge's historical behaviour: wait a
fixed 5 seconds between attempts and retry forever.  Growth, a delay cap,
jitter, and a maximum number of consecutive failures are all opt-in so an
operator can switch to exponential backoff without touching the channel.

Usage::

    from infrastructure.reconnect import ReconnectPolicy

    policy = ReconnectPolicy(base_seconds=1.0, multiplier=2.0, max_attempts=10)
    policy.delay_for(3)      # 4.0
    policy.should_retry(10)  # False
"""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class ReconnectPolicy:
    """Delay schedule between connection attempts.

    Attributes:
        base_seconds: Wait before the first retry (default 5.0).
        multiplier: Growth factor per consecutive failure.  ``1.0`` keeps the
            delay fixed (default).
        max_seconds: Upper bound on any single delay (default 60.0).
        jitter: Add random ±25% to each delay to spread reconnect storms.
        max_attempts: Consecutive failed attempts after which the loop gives
            up.  ``None`` retries forever (default).
    """

    base_seconds: float = 5.0
    multiplier: float = 1.0
    max_seconds: float = 60.0
    jitter: bool = False
    max_attempts: int | None = None

    def __post_init__(self) -> None:
        """Validate policy parameters."""
        if self.base_seconds < 0:
            raise ValueError(f"base_seconds must be non-negative, got {self.base_seconds}")
        if self.multiplier < 1.0:
            raise ValueError(f"multiplier must be >= 1.0, got {self.multiplier}")
        if self.max_seconds < self.base_seconds:
            raise ValueError(
                f"max_seconds ({self.max_seconds}) must be >= base_seconds ({self.base_seconds})"
            )
        if self.max_attempts is not None and self.max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive or None, got {self.max_attempts}")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (1-based)."""
        wait = min(self.base_seconds * (self.multiplier ** max(attempt - 1, 0)), self.max_seconds)
        if self.jitter:
            wait *= 1 + random.uniform(-0.25, 0.25)  # noqa: S311
        return wait

    def should_retry(self, failed_attempts: int) -> bool:
        """True while the loop may keep trying after ``failed_attempts`` failures."""
        return self.max_attempts is None or failed_attempts < self.max_attempts


FIXED_FIVE_SECONDS = ReconnectPolicy()
"""Fixed 5 s interval, unlimited attempts."""
