"""
Game Loop - Drives session clocks from real time.

Sessions keep virtual time; a host that wants wall-clock play calls
pump() once per frame (or run() to block). Tests pass a fake clock.

Usage:
    loop = GameLoop(manager)
    while running:
        loop.pump()
        render(manager)
"""

from __future__ import annotations
from typing import Callable
import logging
import time

from .manager import SessionManager

logger = logging.getLogger(__name__)


class GameLoop:
    """Feeds elapsed wall-clock milliseconds to every active session."""

    def __init__(
        self,
        manager: SessionManager,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.manager = manager
        self._clock = clock
        self._last: float | None = None
        self.running = False

    def pump(self) -> int:
        """
        Advance all sessions by the time since the previous pump.

        The first call only records the start time. Returns the number
        of timers fired.
        """
        now = self._clock()
        if self._last is None:
            self._last = now
            return 0

        elapsed_ms = max(0.0, (now - self._last) * 1000.0)
        self._last = now

        fired = 0
        for session in self.manager.active_sessions():
            fired += session.advance(elapsed_ms)
        return fired

    def run(
        self,
        duration_s: float,
        frame_s: float = 1 / 60,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Pump at roughly `frame_s` intervals for `duration_s` seconds."""
        self.running = True
        fired = 0
        start = self._clock()
        self.pump()
        try:
            while self.running and self._clock() - start < duration_s:
                sleep(frame_s)
                fired += self.pump()
        finally:
            self.running = False
        logger.debug("game loop stopped after %d timer(s)", fired)
        return fired

    def stop(self) -> None:
        self.running = False
