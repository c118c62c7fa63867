import io

import blessed
import pytest

from cellpaint.screen import Screen
from cellpaint.style import DEFAULT_STYLE


class FakeSurface:
    """Records cells and backend calls, plays back queued events."""

    def __init__(self, events=()):
        self.cells = {}
        self.events = list(events)
        self.calls = []

    def set_cell(self, x, y, style, glyph):
        self.cells[(x, y)] = (style, glyph)

    def get_cell(self, x, y):
        return self.cells.get((x, y), (DEFAULT_STYLE, " "))

    def clear(self):
        self.calls.append("clear")
        self.cells.clear()

    def sync(self):
        self.calls.append("sync")

    def show(self):
        self.calls.append("show")

    def poll_event(self):
        return self.events.pop(0)


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def screen():
    t = blessed.Terminal(stream=io.StringIO(), force_styling=None)
    screen = Screen(t)
    screen.width = 80
    screen.height = 25
    return screen
