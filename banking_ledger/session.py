"""
Session Activity Module

Tracks the last interaction of an authenticated session so a front end can
warn about inactivity. The warning is advisory only: it never blocks,
expires or cancels an operation.
"""

from datetime import datetime, timedelta
from typing import Optional

from .accounts import Clock
from .config import get_config


class SessionActivity:
    """Idle tracker for one authenticated identity"""

    def __init__(self, identity_id: str, idle_warning: Optional[timedelta] = None,
                 clock: Optional[Clock] = None):
        self.identity_id = identity_id
        self.idle_warning = idle_warning or timedelta(
            seconds=get_config().session_idle_warning_seconds
        )
        self._clock: Clock = clock or datetime.now
        self.last_interaction = self._clock()

    def touch(self) -> None:
        """Record an interaction now"""
        self.last_interaction = self._clock()

    def idle_for(self) -> timedelta:
        return self._clock() - self.last_interaction

    def should_warn(self) -> bool:
        """Check if the session has been idle for at least the warning threshold"""
        return self.idle_for() >= self.idle_warning
