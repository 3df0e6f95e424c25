import pytest

from pyrtle.drawable import TurtleScreen
from pyrtle.runtime import create_environment
from pyrtle.turtle import Turtle


class RecordingScreen(TurtleScreen):
    """Screen double that counts redraws and returns a fixed bitmap."""

    def __init__(self, size=(100, 100), title="test"):
        super().__init__(size, title)
        self.updates = 0

    def draw_and_update(self):
        self.updates += 1

    def capture_bitmap(self):
        import numpy as np
        bitmap = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        bitmap[:, :, 3] = 255
        return bitmap


@pytest.fixture
def screen():
    return RecordingScreen()


@pytest.fixture
def turtle(screen):
    return Turtle(screen)


@pytest.fixture
def env(turtle):
    return create_environment(turtle)
