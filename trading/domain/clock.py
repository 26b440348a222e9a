"""
Logical clock used to timestamp energy transactions.

Values are nanoseconds since the epoch and strictly increase within a process,
even when the wall clock stalls or steps backwards.
"""

import threading
import time


class LogicalClock:

    def __init__(self, source=time.time_ns):
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self):
        with self._lock:
            current = self._source()
            if current <= self._last:
                current = self._last + 1
            self._last = current
            return current


clock = LogicalClock()
