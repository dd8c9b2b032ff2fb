"""
Sensor frame sources - a recorded-session player and a Kinect v2 adapter.

Both deliver frames on the Qt thread through signals; consumers receive either
a BodyFrame / ColorFrame or None when a tick produced no usable data.
"""

import glob
import json
import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtGui import QImage

from .models import (
    Body, BodyFrame, CameraSpacePoint, ColorFrame, FrameEdge, HandState,
    Joint, JointType, Point2D, TrackingState, empty_joints,
)
from .projection import CoordinateMapper, DepthSpaceMapper
from .constants import DEPTH_WIDTH, DEPTH_HEIGHT
from .errors import SensorError

logger = logging.getLogger(__name__)

BODY_COUNT = 6
IMAGE_PATTERNS = ("*.png", "*.jpg", "*.jpeg", "*.bmp")


class SensorSource(QObject):
    """센서 공통 인터페이스"""

    availability_changed = Signal(bool)
    body_frame_arrived = Signal(object)
    color_frame_arrived = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._is_open = False
        self._is_available = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def is_available(self) -> bool:
        return self._is_available

    @property
    def coordinate_mapper(self) -> CoordinateMapper:
        raise NotImplementedError

    @property
    def display_size(self) -> Tuple[int, int]:
        return DEPTH_WIDTH, DEPTH_HEIGHT

    def _set_available(self, available: bool):
        if available != self._is_available:
            self._is_available = available
            self.availability_changed.emit(available)

    def open(self):
        raise NotImplementedError

    def close(self):
        raise NotImplementedError


# ---------------------------------------------------------------------------
# 녹화 파일 파싱
# ---------------------------------------------------------------------------

def _enum_value(enum_cls, raw: Any, default):
    if raw is None:
        return default
    if isinstance(raw, int):
        return enum_cls(raw)
    return enum_cls[_enum_key(raw)]


def _enum_key(raw: Any) -> str:
    """NotTracked / not tracked / NOT_TRACKED -> NOT_TRACKED"""
    key = re.sub(r"[\s-]+", "_", str(raw).strip())
    key = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", key)
    return key.upper()


def _parse_edges(raw: Any) -> FrameEdge:
    if raw is None:
        return FrameEdge.NONE
    if isinstance(raw, int):
        return FrameEdge(raw)
    if isinstance(raw, str):
        raw = [raw]
    edges = FrameEdge.NONE
    for name in raw:
        edges |= FrameEdge[_enum_key(name)]
    return edges


def _parse_body(data: Dict[str, Any]) -> Body:
    joints = empty_joints()
    for label, joint_data in (data.get("joints") or {}).items():
        joint_type = JointType.from_label(label)
        x, y, z = (float(v) for v in joint_data["position"])
        joints[joint_type] = Joint(
            joint_type=joint_type,
            position=CameraSpacePoint(x, y, z),
            tracking_state=_enum_value(TrackingState, joint_data.get("tracking_state"),
                                       TrackingState.TRACKED),
        )
    return Body(
        is_tracked=bool(data.get("tracked", True)),
        joints=joints,
        hand_left_state=_enum_value(HandState, data.get("hand_left_state"), HandState.UNKNOWN),
        hand_right_state=_enum_value(HandState, data.get("hand_right_state"), HandState.UNKNOWN),
        clipped_edges=_parse_edges(data.get("clipped_edges")),
        tracking_id=int(data.get("tracking_id", 0)),
    )


def parse_body_frame(data: Dict[str, Any], frame_number: int) -> BodyFrame:
    """녹화 JSON -> BodyFrame (슬롯 수는 BODY_COUNT로 맞춤)"""
    bodies = [_parse_body(body_data) for body_data in data.get("bodies", [])]
    while len(bodies) < BODY_COUNT:
        bodies.append(Body.untracked())
    return BodyFrame(frame_number=frame_number, bodies=bodies)


def load_body_frame(path: str, frame_number: int) -> BodyFrame:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_body_frame(data, frame_number)


def image_to_bgra(image: QImage) -> np.ndarray:
    """QImage -> (H, W, 4) BGRA 배열 (ARGB32는 리틀엔디언에서 BGRA 순서)"""
    image = image.convertToFormat(QImage.Format.Format_ARGB32)
    width, height = image.width(), image.height()
    buffer = np.frombuffer(image.constBits(), dtype=np.uint8, count=image.sizeInBytes())
    rows = buffer.reshape(height, image.bytesPerLine())
    return rows[:, :width * 4].reshape(height, width, 4).copy()


def load_color_frame(path: str, frame_number: int) -> Optional[ColorFrame]:
    image = QImage(path)
    if image.isNull():
        return None
    return ColorFrame(frame_number=frame_number, pixels=image_to_bgra(image))


class RecordingSensor(SensorSource):
    """
    녹화 폴더 재생 센서.
    *.json 은 바디 프레임, 이미지 파일은 컬러 프레임으로 정렬 순서대로 반복 재생한다.
    """

    def __init__(self, folder: str, fps: int = 30, parent=None):
        super().__init__(parent)
        self.folder = folder
        self.fps = fps
        self.body_files: List[str] = []
        self.color_files: List[str] = []
        self.current_frame = 0
        self._mapper = DepthSpaceMapper()
        self.play_timer = QTimer(self)
        self.play_timer.timeout.connect(self._on_timer_tick)

    @property
    def coordinate_mapper(self) -> CoordinateMapper:
        return self._mapper

    @property
    def frame_count(self) -> int:
        return max(len(self.body_files), len(self.color_files))

    def _scan_folder(self):
        self.body_files = sorted(glob.glob(os.path.join(self.folder, "*.json")))
        color_files = []
        for pattern in IMAGE_PATTERNS:
            color_files.extend(glob.glob(os.path.join(self.folder, pattern)))
        self.color_files = sorted(color_files)

    def open(self):
        if self._is_open:
            return
        if self.folder and os.path.isdir(self.folder):
            self._scan_folder()
        else:
            logger.warning("Recording folder not found: %r", self.folder)
        self._is_open = True
        self.current_frame = 0
        logger.info("Recording opened: %s (%d body, %d color frames)",
                    self.folder, len(self.body_files), len(self.color_files))
        self._set_available(self.frame_count > 0)
        if self.frame_count > 0:
            self.play_timer.start(int(1000 / max(1, self.fps)))

    def close(self):
        if not self._is_open:
            return
        self.play_timer.stop()
        self._is_open = False
        self._set_available(False)
        logger.info("Recording closed: %s", self.folder)

    def read_body_frame(self, index: int) -> Optional[BodyFrame]:
        path = self.body_files[index]
        try:
            return load_body_frame(path, index)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Skipping unreadable body frame %s: %s", path, e)
            return None

    def read_color_frame(self, index: int) -> Optional[ColorFrame]:
        frame = load_color_frame(self.color_files[index], index)
        if frame is None:
            logger.warning("Skipping unreadable color frame %s", self.color_files[index])
        return frame

    def step(self):
        """현재 프레임을 내보내고 다음 프레임으로 (끝나면 처음으로)"""
        if self.frame_count == 0:
            return
        index = self.current_frame
        if self.body_files:
            self.body_frame_arrived.emit(self.read_body_frame(index % len(self.body_files)))
        if self.color_files:
            self.color_frame_arrived.emit(self.read_color_frame(index % len(self.color_files)))
        self.current_frame = (index + 1) % self.frame_count

    def _on_timer_tick(self):
        self.step()


# ---------------------------------------------------------------------------
# Kinect v2 (pykinect2, Windows 전용)
# ---------------------------------------------------------------------------

class KinectCoordinateMapper:
    """SDK CoordinateMapper 위임"""

    def __init__(self, sdk_mapper, point_type):
        self._mapper = sdk_mapper
        self._point_type = point_type

    def map_camera_point_to_depth_space(self, point: CameraSpacePoint) -> Point2D:
        sdk_point = self._point_type()
        sdk_point.x, sdk_point.y, sdk_point.z = point.x, point.y, point.z
        depth_point = self._mapper.MapCameraPointToDepthSpace(sdk_point)
        return Point2D(float(depth_point.x), float(depth_point.y))


def convert_sdk_body(sdk_body, joint_count: int = len(JointType)) -> Body:
    """pykinect2 KinectBody -> Body"""
    if sdk_body is None or not sdk_body.is_tracked:
        return Body.untracked()
    joints = empty_joints()
    for index in range(joint_count):
        sdk_joint = sdk_body.joints[index]
        joint_type = JointType(index)
        joints[joint_type] = Joint(
            joint_type=joint_type,
            position=CameraSpacePoint(float(sdk_joint.Position.x),
                                      float(sdk_joint.Position.y),
                                      float(sdk_joint.Position.z)),
            tracking_state=TrackingState(int(sdk_joint.TrackingState)),
        )
    return Body(
        is_tracked=True,
        joints=joints,
        hand_left_state=HandState(int(sdk_body.hand_left_state)),
        hand_right_state=HandState(int(sdk_body.hand_right_state)),
        clipped_edges=FrameEdge(int(sdk_body.clipped_edges)),
        tracking_id=int(sdk_body.tracking_id),
    )


class KinectV2Sensor(SensorSource):
    """PyKinectRuntime을 QTimer로 폴링하는 센서"""

    POLL_INTERVAL_MS = 10

    def __init__(self, body: bool = True, color: bool = False, parent=None):
        super().__init__(parent)
        self.want_body = body
        self.want_color = color
        self.runtime = None
        self._mapper: Optional[KinectCoordinateMapper] = None
        self._frame_number = 0
        self.poll_timer = QTimer(self)
        self.poll_timer.timeout.connect(self._poll)

    @property
    def coordinate_mapper(self) -> CoordinateMapper:
        if self._mapper is None:
            raise SensorError("Kinect sensor is not open")
        return self._mapper

    def open(self):
        if self._is_open:
            return
        try:
            from pykinect2 import PyKinectV2, PyKinectRuntime
        except ImportError as e:
            raise SensorError("pykinect2 is required for the Kinect sensor (pip install kinect-viewer[kinect])") from e

        frame_types = 0
        if self.want_body:
            frame_types |= PyKinectV2.FrameSourceTypes_Body
        if self.want_color:
            frame_types |= PyKinectV2.FrameSourceTypes_Color

        self.runtime = PyKinectRuntime.PyKinectRuntime(frame_types)
        self._mapper = KinectCoordinateMapper(self.runtime._mapper, PyKinectV2._CameraSpacePoint)
        self._is_open = True
        logger.info("Kinect sensor opened (body=%s, color=%s)", self.want_body, self.want_color)
        self._set_available(self._query_available())
        self.poll_timer.start(self.POLL_INTERVAL_MS)

    def close(self):
        if self.runtime is None:
            return
        self.poll_timer.stop()
        self.runtime.close()
        self.runtime = None
        self._mapper = None
        self._is_open = False
        self._set_available(False)
        logger.info("Kinect sensor closed")

    def _query_available(self) -> bool:
        return bool(self.runtime._sensor.IsAvailable)

    def _poll(self):
        if self.runtime is None:
            return
        self._set_available(self._query_available())

        if self.want_body and self.runtime.has_new_body_frame():
            data = self.runtime.get_last_body_frame()
            frame = None
            if data is not None and data.bodies is not None:
                frame = BodyFrame(frame_number=self._frame_number,
                                  bodies=[convert_sdk_body(b) for b in data.bodies])
            self.body_frame_arrived.emit(frame)
            self._frame_number += 1

        if self.want_color and self.runtime.has_new_color_frame():
            raw = self.runtime.get_last_color_frame()
            frame = None
            if raw is not None:
                width = self.runtime.color_frame_desc.Width
                height = self.runtime.color_frame_desc.Height
                pixels = np.asarray(raw, dtype=np.uint8).reshape(height, width, 4)
                frame = ColorFrame(frame_number=self._frame_number, pixels=pixels.copy())
            self.color_frame_arrived.emit(frame)
            self._frame_number += 1


def create_sensor(config, body: bool = True, color: bool = False) -> SensorSource:
    """설정에 따른 센서 생성 (열지는 않음)"""
    if config.sensor == "kinect":
        return KinectV2Sensor(body=body, color=color)
    return RecordingSensor(config.recording_dir, fps=config.fps)
