"""
Shared test fixtures — API test client, manual timers for debounce tests.
"""

import pytest
from fastapi.testclient import TestClient

from fillcalc.main import app


class ManualTimer:
    """Stands in for threading.Timer; fires only when the test says so."""

    created = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        ManualTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if self.started and not self.cancelled:
            self.function()


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def manual_timers():
    """Timer factory whose timers never run on their own; returns the class."""
    ManualTimer.created = []
    return ManualTimer
