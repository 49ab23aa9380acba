"""Define utility functions to simplify logging from inside or outside of ROS."""

from __future__ import annotations

import threading
import time
from typing import Callable

from rich.console import Console

try:
    import rospy

    ROS_PRESENT = True
except ModuleNotFoundError:
    ROS_PRESENT = False

import logging

logger = logging.getLogger("robot_frames")
console = Console()


def log_debug(message: str) -> None:
    """Log the given string at the debug level."""
    if ROS_PRESENT:
        rospy.logdebug(message)
    else:
        logger.debug(message)


def log_info(message: str) -> None:
    """Log the given string to standard output."""
    if ROS_PRESENT:
        rospy.loginfo(message)
    else:
        logger.info(message)


def log_warn(message: str) -> None:
    """Log the given string as a warning."""
    if ROS_PRESENT:
        rospy.logwarn(message)
    else:
        logger.warning(message)


def log_error(message: str) -> None:
    """Log the given string as an error."""
    if ROS_PRESENT:
        rospy.logerr(message)
    else:
        logger.error(message)


class ThrottledWarning:
    """Logs warnings at most once per period for each distinct key."""

    def __init__(
        self,
        period_s: float,
        clock: Callable[[], float] = time.monotonic,
        max_keys: int = 1024,
    ) -> None:
        """Initialize the throttle with the minimum duration between repeated warnings.

        :param period_s: Duration (seconds) during which repeats of a key are suppressed
        :param clock: Monotonic time source (seconds) used to measure the period
        :param max_keys: Number of remembered keys beyond which expired keys are forgotten
        """
        self.period_s = period_s
        self.max_keys = max_keys
        self._clock = clock

        self._lock = threading.Lock()
        self._last_logged_s: dict[str, float] = {}
        """Maps each key to the time (seconds) at which it was last logged."""

    @property
    def num_keys(self) -> int:
        """Count the keys whose last warning time is currently remembered."""
        with self._lock:
            return len(self._last_logged_s)

    def warn(self, key: str, message: str) -> bool:
        """Log the message unless the key was already logged within the period.

        :param key: Identifier deciding which earlier warnings suppress this one
        :param message: Text of the warning
        :return: True if the warning was logged, False if it was suppressed
        """
        now_s = self._clock()
        with self._lock:
            last_s = self._last_logged_s.get(key)
            if last_s is not None and now_s - last_s < self.period_s:
                return False

            self._last_logged_s[key] = now_s
            if len(self._last_logged_s) > self.max_keys:
                self._forget_expired(now_s)

        log_warn(message)
        return True

    def _forget_expired(self, now_s: float) -> None:
        """Drop keys that no longer suppress any warning (caller holds the lock)."""
        expired = [k for k, last_s in self._last_logged_s.items() if now_s - last_s >= self.period_s]
        for key in expired:
            del self._last_logged_s[key]
