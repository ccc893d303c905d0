import pytest


class RecordingSink:
    """OutputSink that remembers every positioned write."""

    def __init__(self):
        self.writes = []
        self.flushes = 0

    def write(self, x, y, text, fg=None, bg=None):
        self.writes.append((x, y, text, fg, bg))

    def flush(self):
        self.flushes += 1

    def reset(self):
        self.writes.clear()
        self.flushes = 0

    def texts(self):
        return [(x, y, text) for x, y, text, _, _ in self.writes]


@pytest.fixture
def sink():
    return RecordingSink()
