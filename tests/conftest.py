import matplotlib

matplotlib.use("Agg")

import pytest

from bess_pcr.system_parameters import PCRParameters


class RecordingObserver:
    """Collects activation events instead of logging them."""

    def __init__(self):
        self.events = []

    def transaction_activated(self, transaction, t):
        self.events.append((transaction, t))


@pytest.fixture
def params():
    return PCRParameters()


@pytest.fixture
def observer():
    return RecordingObserver()
