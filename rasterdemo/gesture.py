"""
Two-click gesture state for line drawing.
"""

from enum import Enum


class GestureState(Enum):
    EMPTY = 0
    ONE_POINT = 1
    READY = 2


class ClickGesture:
    """
    Collects pointer-down positions until two are available.

    Positions are truncated toward zero with int(), matching how the
    platform reports sub-pixel pointer coordinates.

    Usage:
        gesture = ClickGesture()
        if gesture.press(event.pos) is GestureState.READY:
            p0, p1 = gesture.take()
    """

    def __init__(self):
        self.points = []

    @property
    def state(self):
        return GestureState(len(self.points))

    def press(self, pos):
        """Record a pointer-down position and return the new state."""
        if self.state is GestureState.READY:
            raise RuntimeError("gesture is complete; call take() first")
        self.points.append((int(pos[0]), int(pos[1])))
        return self.state

    def take(self):
        """Return the two recorded points in order and reset."""
        if self.state is not GestureState.READY:
            raise RuntimeError("gesture needs two points before take()")
        p0, p1 = self.points
        self.points = []
        return p0, p1

    def reset(self):
        self.points = []
