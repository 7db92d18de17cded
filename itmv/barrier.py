"""A reusable thread barrier built on sense reversal."""

from __future__ import annotations

import threading


class SenseBarrier:
    """Block a fixed number of threads until all of them have arrived.

    Each completed round flips :attr:`odd_round`.  The thread that arrives
    last in a round is released first and gets ``True`` from :meth:`wait`;
    every other thread gets ``False``.
    """

    def __init__(self, total_nthread):
        if isinstance(total_nthread, bool) or not isinstance(total_nthread, int):
            raise TypeError("total_nthread must be an integer")
        if total_nthread <= 0:
            raise ValueError("total_nthread must be positive")
        self.total_nthread = total_nthread
        self._cond = threading.Condition()
        self._arrived = 0
        self._odd_round = False

    @property
    def odd_round(self):
        """Whether the barrier has completed an odd number of rounds."""
        return self._odd_round

    def wait(self):
        """Wait for the round to complete; ``True`` for the last arrival."""
        with self._cond:
            local_sense = not self._odd_round
            self._arrived += 1
            if self._arrived == self.total_nthread:
                self._arrived = 0
                self._odd_round = local_sense
                self._cond.notify_all()
                return True
            self._cond.wait_for(lambda: self._odd_round == local_sense)
            return False