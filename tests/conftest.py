import pytest
from PySide6.QtCore import QCoreApplication

from mazefill.utils.grid_factory import grid_from_rows


# 7x5 maze: start (1, 1), end (5, 3), one dead end at (3, 3)
SMALL_MAZE = [
    "#######",
    "#     #",
    "# ### #",
    "#   # #",
    "#######",
]


class FakeClock:
    """Manually advanced clock for timing-dependent tests."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def small_maze():
    return grid_from_rows(SMALL_MAZE)


@pytest.fixture
def clock():
    return FakeClock()
