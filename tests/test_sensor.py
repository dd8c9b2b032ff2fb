"""Tests for recording parsing, the recording sensor and the Kinect adapter."""
import json
import sys
import types
from types import SimpleNamespace

import numpy as np
import pytest
from PySide6.QtGui import QColor, QImage

from kinect_viewer.canvas import color_frame_to_image
from kinect_viewer.config import ViewerConfig
from kinect_viewer.constants import HAND_CLOSED_COLOR, HAND_SIZE
from kinect_viewer.errors import SensorError
from kinect_viewer.models import (
    Body, BodyFrame, CameraSpacePoint, ColorFrame, FrameEdge, HandState, JointType,
    TrackingState,
)
from kinect_viewer.pipeline import BodyFrameProcessor
from kinect_viewer.projection import project_point
from kinect_viewer.renderer import SkeletonRenderer
from kinect_viewer.sensor import (
    BODY_COUNT, KinectCoordinateMapper, KinectV2Sensor, RecordingSensor, convert_sdk_body,
    create_sensor, image_to_bgra, parse_body_frame,
)


FRAME = {
    "bodies": [{
        "tracked": True,
        "tracking_id": 7,
        "hand_left_state": "open",
        "hand_right_state": "Closed",
        "clipped_edges": ["top", "left"],
        "joints": {
            "Head": {"position": [0, 0.5, 1.2], "tracking_state": "tracked"},
            "Neck": {"position": [0, 0.3, 1.2], "tracking_state": "Inferred"},
            "HandTipLeft": {"position": [-0.4, 0.1, 1.0], "tracking_state": "NotTracked"},
        },
    }],
}


class TestParseBodyFrame:

    def test_parses_body_fields(self):
        frame = parse_body_frame(FRAME, 3)
        body = frame.bodies[0]
        assert frame.frame_number == 3
        assert body.is_tracked and body.tracking_id == 7
        assert body.hand_left_state == HandState.OPEN
        assert body.hand_right_state == HandState.CLOSED
        assert body.clipped_edges == FrameEdge.TOP | FrameEdge.LEFT

    def test_joint_set_is_exhaustive(self):
        body = parse_body_frame(FRAME, 0).bodies[0]
        assert set(body.joints) == set(JointType)
        assert body.joints[JointType.NECK].tracking_state == TrackingState.INFERRED
        assert body.joints[JointType.HAND_TIP_LEFT].tracking_state == TrackingState.NOT_TRACKED
        assert body.joints[JointType.KNEE_LEFT].tracking_state == TrackingState.NOT_TRACKED
        assert body.joints[JointType.HEAD].position.z == pytest.approx(1.2)

    def test_fills_body_slots(self):
        frame = parse_body_frame(FRAME, 0)
        assert len(frame.bodies) == BODY_COUNT
        assert len(frame.tracked_bodies) == 1

    def test_single_edge_name(self):
        frame = parse_body_frame({"bodies": [{"tracked": True, "clipped_edges": "bottom"}]}, 0)
        assert frame.bodies[0].clipped_edges == FrameEdge.BOTTOM

    def test_unknown_joint_raises(self):
        with pytest.raises(ValueError):
            parse_body_frame({"bodies": [{"joints": {"Tail": {"position": [0, 0, 1]}}}]}, 0)


@pytest.fixture
def recording(tmp_path):
    (tmp_path / "0001.json").write_text(json.dumps(FRAME), encoding="utf-8")
    (tmp_path / "0002.json").write_text("{broken", encoding="utf-8")
    return tmp_path


class TestRecordingSensor:

    def test_open_reports_availability(self, recording):
        sensor = RecordingSensor(str(recording), fps=30)
        changes = []
        sensor.availability_changed.connect(lambda available: changes.append(available))
        sensor.open()
        assert sensor.is_open and sensor.is_available
        sensor.close()
        sensor.close()
        assert changes == [True, False]

    def test_step_emits_frames_in_order_and_loops(self, recording):
        sensor = RecordingSensor(str(recording))
        frames = []
        sensor.body_frame_arrived.connect(lambda frame: frames.append(frame))
        sensor.open()
        for _ in range(3):
            sensor.step()
        sensor.close()

        assert frames[0].frame_number == 0
        assert frames[1] is None
        assert frames[2].frame_number == 0

    def test_empty_folder_is_unavailable(self, tmp_path):
        sensor = RecordingSensor(str(tmp_path))
        sensor.open()
        assert not sensor.is_available
        sensor.step()
        sensor.close()

    def test_color_frames_from_images(self, tmp_path):
        image = QImage(5, 2, QImage.Format.Format_ARGB32)
        image.fill(QColor(10, 20, 30))
        image.save(str(tmp_path / "frame.png"))

        sensor = RecordingSensor(str(tmp_path))
        frames = []
        sensor.color_frame_arrived.connect(lambda frame: frames.append(frame))
        sensor.open()
        sensor.step()
        sensor.close()

        frame = frames[0]
        assert (frame.width, frame.height) == (5, 2)
        # BGRA order
        assert tuple(frame.pixels[0, 0]) == (30, 20, 10, 255)


class TestColorConversion:

    def test_bgra_buffer_to_image(self):
        pixels = np.zeros((2, 3, 4), dtype=np.uint8)
        pixels[..., 0] = 255
        pixels[..., 3] = 255
        image = color_frame_to_image(ColorFrame(frame_number=0, pixels=pixels))
        assert (image.width(), image.height()) == (3, 2)
        assert image.pixelColor(0, 0) == QColor(0, 0, 255)
        np.testing.assert_array_equal(image_to_bgra(image), pixels)


class TestCreateSensor:

    def test_recording_by_default(self, tmp_path):
        sensor = create_sensor(ViewerConfig(recording_dir=str(tmp_path), fps=12))
        assert isinstance(sensor, RecordingSensor)
        assert sensor.fps == 12

    def test_kinect(self):
        sensor = create_sensor(ViewerConfig(sensor="kinect"), body=False, color=True)
        assert isinstance(sensor, KinectV2Sensor)
        assert sensor.want_color and not sensor.want_body
        assert not sensor.is_open


def sdk_body(tracked=True, head_z=1.5, hand_left_state=3, clipped_edges=8):
    """pykinect2 KinectBody look-alike: every joint tracked at z=1.5."""
    joints = [
        SimpleNamespace(
            Position=SimpleNamespace(x=0.01 * index, y=-0.01 * index, z=1.5),
            TrackingState=2,
        )
        for index in range(len(JointType))
    ]
    joints[JointType.HEAD].Position.z = head_z
    joints[JointType.NECK].TrackingState = 1
    return SimpleNamespace(
        is_tracked=tracked,
        joints=joints,
        hand_left_state=hand_left_state,
        hand_right_state=0,
        clipped_edges=clipped_edges,
        tracking_id=72057594037929000,
    )


class SdkMapper:
    """CoordinateMapper COM look-alike that records the points it receives."""

    def __init__(self):
        self.points = []

    def MapCameraPointToDepthSpace(self, point):
        self.points.append(point)
        return SimpleNamespace(x=point.x * 100, y=point.y * 100)


class SdkRuntime:
    """PyKinectRuntime look-alike with one pending body frame and one color frame."""

    def __init__(self, frame_types=0, bodies=None, available=True):
        self.frame_types = frame_types
        self._sensor = SimpleNamespace(IsAvailable=available)
        self._mapper = SdkMapper()
        self.color_frame_desc = SimpleNamespace(Width=3, Height=2)
        self._bodies = bodies
        self.closed = False

    def has_new_body_frame(self):
        return True

    def get_last_body_frame(self):
        return SimpleNamespace(bodies=self._bodies)

    def has_new_color_frame(self):
        return True

    def get_last_color_frame(self):
        return np.arange(3 * 2 * 4, dtype=np.uint8)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_pykinect2(monkeypatch):
    package = types.ModuleType("pykinect2")
    package.PyKinectV2 = SimpleNamespace(
        FrameSourceTypes_Color=1,
        FrameSourceTypes_Body=32,
        _CameraSpacePoint=SimpleNamespace,
    )
    package.PyKinectRuntime = SimpleNamespace(PyKinectRuntime=SdkRuntime)
    monkeypatch.setitem(sys.modules, "pykinect2", package)
    return package


class TestConvertSdkBody:

    def test_joint_and_body_fields(self):
        body = convert_sdk_body(sdk_body(head_z=-1.0))
        assert body.is_tracked
        assert set(body.joints) == set(JointType)
        head = body.joints[JointType.HEAD]
        assert head.position.x == pytest.approx(0.03)
        assert head.position.z == -1.0
        assert head.tracking_state == TrackingState.TRACKED
        assert body.joints[JointType.NECK].tracking_state == TrackingState.INFERRED
        assert body.hand_left_state == HandState.CLOSED
        assert body.hand_right_state == HandState.UNKNOWN
        assert body.clipped_edges == FrameEdge.BOTTOM
        assert body.tracking_id == 72057594037929000

    def test_untracked_and_missing_bodies(self):
        for raw in (None, sdk_body(tracked=False)):
            body = convert_sdk_body(raw)
            assert not body.is_tracked
            assert body.joints == Body.untracked().joints

    def test_converted_body_renders(self, painter, mapper):
        frame = BodyFrame(frame_number=0, bodies=[convert_sdk_body(sdk_body(head_z=-1.0))])
        projected = BodyFrameProcessor(mapper).process(frame)
        SkeletonRenderer(512, 424).draw_frame(painter, projected)

        # 17 bones, 18 joints plus the closed left hand, background plus bottom edge
        assert len(painter.of_kind("line")) == 17
        ellipses = painter.of_kind("ellipse")
        assert len(ellipses) == 19
        assert [e[1] for e in ellipses if e[3] == HAND_SIZE] == [HAND_CLOSED_COLOR]
        assert len(painter.of_kind("fill")) == 2


class TestKinectCoordinateMapper:

    def test_sdk_receives_clamped_point(self):
        sdk_mapper = SdkMapper()
        mapper = KinectCoordinateMapper(sdk_mapper, SimpleNamespace)
        point = project_point(CameraSpacePoint(0.5, -0.25, -1.0), mapper)

        sent = sdk_mapper.points[0]
        assert (sent.x, sent.y, sent.z) == (0.5, -0.25, 0.1)
        assert (point.x, point.y) == (50.0, -25.0)


class TestKinectV2Sensor:

    def test_open_without_pykinect2_raises(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "pykinect2", None)
        sensor = KinectV2Sensor()
        with pytest.raises(SensorError):
            sensor.open()
        assert not sensor.is_open
        with pytest.raises(SensorError):
            sensor.coordinate_mapper

    def test_open_requests_frame_sources_and_reports_availability(self, fake_pykinect2):
        sensor = KinectV2Sensor(body=True, color=True)
        changes = []
        sensor.availability_changed.connect(lambda available: changes.append(available))
        sensor.open()
        runtime = sensor.runtime
        assert runtime.frame_types == 33
        assert sensor.is_open and sensor.is_available
        assert sensor.poll_timer.isActive()

        sensor.close()
        sensor.close()
        assert runtime.closed
        assert not sensor.poll_timer.isActive()
        assert changes == [True, False]

    def test_poll_emits_converted_frames(self, fake_pykinect2):
        sensor = KinectV2Sensor(body=True, color=True)
        sensor.open()
        sensor.runtime._bodies = [None, sdk_body()]
        bodies, colors = [], []
        sensor.body_frame_arrived.connect(lambda frame: bodies.append(frame))
        sensor.color_frame_arrived.connect(lambda frame: colors.append(frame))
        sensor._poll()
        sensor.close()

        assert [b.is_tracked for b in bodies[0].bodies] == [False, True]
        assert colors[0].pixels.shape == (2, 3, 4)
        assert bodies[0].frame_number == 0
        assert colors[0].frame_number == 1

    def test_poll_without_bodies_emits_none(self, fake_pykinect2):
        sensor = KinectV2Sensor()
        sensor.open()
        frames = []
        sensor.body_frame_arrived.connect(lambda frame: frames.append(frame))
        sensor._poll()
        sensor.close()
        assert frames == [None]

    def test_lost_availability_is_reported(self, fake_pykinect2):
        sensor = KinectV2Sensor()
        sensor.open()
        changes = []
        sensor.availability_changed.connect(lambda available: changes.append(available))
        sensor.runtime._sensor.IsAvailable = False
        sensor._poll()
        sensor.close()
        assert changes == [False]
