"""Define a class that calls a given function at a fixed rate on a background thread."""

from __future__ import annotations

import threading
from typing import Callable

import rospy


class CallLoopThread:
    """Repeatedly calls a function at a fixed rate until stopped or until ROS shuts down."""

    def __init__(self, func: Callable[[], object], loop_hz: float, name: str = "call_loop") -> None:
        """Start a daemon thread that calls the given function in a loop.

        :param func: Function called once per loop iteration (its result is ignored)
        :param loop_hz: Frequency (Hz) at which the function is called
        :param name: Name of the background thread
        """
        self._function = func
        self._loop_hz = loop_hz
        self._stop_requested = threading.Event()
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)
        self._thread.start()

    def stop(self, timeout_s: float = 1.0) -> None:
        """Request that the loop exit and wait briefly for the thread to finish."""
        self._stop_requested.set()
        self._thread.join(timeout=timeout_s)

    def _loop(self) -> None:
        """Call the stored function once per period."""
        try:
            rate_hz = rospy.Rate(self._loop_hz)
            while not rospy.is_shutdown() and not self._stop_requested.is_set():
                self._function()
                rate_hz.sleep()
        except rospy.ROSInterruptException as ros_exc:
            rospy.logwarn(f"[CallLoopThread] {self._thread.name}: {ros_exc}")
