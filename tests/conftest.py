"""Shared test fixtures for kinect_viewer tests."""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from kinect_viewer.models import (
    Body, BodyFrame, CameraSpacePoint, Joint, JointType, Point2D, TrackingState
)


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Timers and images need a Qt application instance."""
    app = QApplication.instance() or QApplication([])
    yield app


def make_joint(joint_type, x=0.0, y=0.0, z=1.0, state=TrackingState.TRACKED):
    return Joint(joint_type, CameraSpacePoint(x, y, z), state)


def make_body(overrides=None, state=TrackingState.TRACKED, **kwargs):
    """Tracked body with every joint filled, optionally overriding some joints."""
    joints = {
        jt: make_joint(jt, x=0.01 * jt.value, y=-0.01 * jt.value, z=1.5, state=state)
        for jt in JointType
    }
    for joint in (overrides or []):
        joints[joint.joint_type] = joint
    return Body(is_tracked=True, joints=joints, **kwargs)


class RecordingMapper:
    """Coordinate mapper that records its inputs and maps (x, y, z) -> (x * 100, y * 100)."""

    def __init__(self):
        self.calls = []

    def map_camera_point_to_depth_space(self, point):
        self.calls.append(point)
        return Point2D(point.x * 100, point.y * 100)


class FakePainter:
    """QPainter stand-in that records drawing calls."""

    def __init__(self):
        self.calls = []
        self.pen = None
        self.brush = None

    def save(self):
        self.calls.append(("save",))

    def restore(self):
        self.calls.append(("restore",))

    def setClipRect(self, rect):
        self.calls.append(("clip", rect))

    def fillRect(self, rect, color):
        self.calls.append(("fill", rect, color))

    def setPen(self, pen):
        self.pen = pen

    def setBrush(self, brush):
        self.brush = brush

    def drawLine(self, p1, p2):
        self.calls.append(("line", self.pen, p1, p2))

    def drawEllipse(self, center, rx, ry):
        self.calls.append(("ellipse", self.brush.color(), center, rx, ry))

    def of_kind(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def mapper():
    return RecordingMapper()


@pytest.fixture
def painter():
    return FakePainter()


@pytest.fixture
def tracked_body():
    return make_body()


@pytest.fixture
def body_frame(tracked_body):
    return BodyFrame(frame_number=0, bodies=[Body.untracked(), tracked_body])
