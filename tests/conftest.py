"""Shared fixtures for the animation engine tests."""

import pytest

from propanim import KeyframeTrack, NumberTrack, PositionTrack, Timeline


class Sprite:
    """Plain object target with attribute properties."""

    def __init__(self, x=0.0, y=0.0, z=0.0, left="0px"):
        self.x = x
        self.y = y
        self.z = z
        self.left = left


@pytest.fixture
def timeline():
    return Timeline()


@pytest.fixture
def box():
    return {"x": 0, "y": 0, "left": "0px", "opacity": 1.0}


@pytest.fixture
def sprite():
    return Sprite()


@pytest.fixture
def number_track():
    """Stopped number track with four samples every 0.5s."""
    return NumberTrack("level", {"value": 0.0}, 0.5, recording=False, data=[1.0, 2.0, 3.0, 4.0])


@pytest.fixture
def position_track():
    return PositionTrack(
        "hand",
        {"x": 0.0, "y": 0.0, "z": 0.0},
        1.0,
        recording=False,
        data={"x": [1.0, 2.0], "y": [5.0, 6.0], "z": [9.0, 9.5]},
    )


@pytest.fixture
def keyframe_track(box):
    return KeyframeTrack("box", box)
