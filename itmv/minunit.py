"""A minimal test runner that counts runs and failures."""

from __future__ import annotations

import time


def check_assert(msg, condition):
    """Return ``msg`` when ``condition`` is false, otherwise ``None``."""
    return None if condition else msg


def get_time():
    """Wall-clock time in seconds."""
    return time.time()


class MiniUnit:
    """Run test functions that return a failure message or ``None``."""

    def __init__(self):
        self.tests_run = 0
        self.tests_failed = 0

    def run_test(self, test_fun):
        """Run one test, record the outcome and return its message."""
        message = test_fun()
        self.tests_run += 1
        if message:
            self.tests_failed += 1
        return message

    def summary(self, startmsg):
        """A one-line report of failures out of tests run."""
        return f"{startmsg} Failed {self.tests_failed} out of {self.tests_run} tests"