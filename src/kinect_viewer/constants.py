"""
Constants for skeleton rendering, status messages and media selection.
"""

from typing import List, Tuple

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPen

from .models import JointType


# 렌더링할 뼈대 연결 (하체 제외 상체 위주)
BONES: List[Tuple[JointType, JointType]] = [
    # 몸통
    (JointType.HEAD, JointType.NECK),
    (JointType.NECK, JointType.SPINE_SHOULDER),
    (JointType.SPINE_SHOULDER, JointType.SPINE_MID),
    (JointType.SPINE_MID, JointType.SPINE_BASE),
    (JointType.SPINE_SHOULDER, JointType.SHOULDER_RIGHT),
    (JointType.SPINE_SHOULDER, JointType.SHOULDER_LEFT),
    (JointType.SPINE_BASE, JointType.HIP_RIGHT),
    (JointType.SPINE_BASE, JointType.HIP_LEFT),
    # 오른팔
    (JointType.SHOULDER_RIGHT, JointType.ELBOW_RIGHT),
    (JointType.ELBOW_RIGHT, JointType.WRIST_RIGHT),
    (JointType.WRIST_RIGHT, JointType.HAND_RIGHT),
    (JointType.HAND_RIGHT, JointType.HAND_TIP_RIGHT),
    (JointType.WRIST_RIGHT, JointType.THUMB_RIGHT),
    # 왼팔
    (JointType.SHOULDER_LEFT, JointType.ELBOW_LEFT),
    (JointType.ELBOW_LEFT, JointType.WRIST_LEFT),
    (JointType.WRIST_LEFT, JointType.HAND_LEFT),
    (JointType.HAND_LEFT, JointType.HAND_TIP_LEFT),
    (JointType.WRIST_LEFT, JointType.THUMB_LEFT),
]

# 렌더링/로그에서 제외되는 하체 관절 (HipRight는 제외 대상이 아님)
LOWER_BODY_JOINTS = frozenset({
    JointType.HIP_LEFT,
    JointType.KNEE_LEFT,
    JointType.ANKLE_LEFT,
    JointType.FOOT_LEFT,
    JointType.KNEE_RIGHT,
    JointType.ANKLE_RIGHT,
    JointType.FOOT_RIGHT,
})

# 그리기 크기
JOINT_THICKNESS = 3
CLIP_BOUNDS_THICKNESS = 10
HAND_SIZE = 30

# 음수 depth를 대체하는 최소값
INFERRED_Z_POSITION_CLAMP = 0.1

# Depth(표시) 공간 / 컬러 프레임 크기
DEPTH_WIDTH = 512
DEPTH_HEIGHT = 424
COLOR_WIDTH = 1920
COLOR_HEIGHT = 1080

# 관절/손/가장자리 색상
TRACKED_JOINT_COLOR = QColor(68, 192, 68)
INFERRED_JOINT_COLOR = QColor(Qt.GlobalColor.yellow)
HAND_CLOSED_COLOR = QColor(255, 0, 0, 128)
HAND_OPEN_COLOR = QColor(0, 255, 0, 128)
HAND_LASSO_COLOR = QColor(0, 0, 255, 128)
CLIPPED_EDGE_COLOR = QColor(Qt.GlobalColor.red)
BACKGROUND_COLOR = QColor(Qt.GlobalColor.black)

# 추정된 뼈대용 펜
INFERRED_BONE_PEN = QPen(QColor(Qt.GlobalColor.gray), 1)

# 바디 슬롯별 펜 색상
BODY_PEN_COLORS = [
    QColor("red"),
    QColor("orange"),
    QColor("green"),
    QColor("blue"),
    QColor("indigo"),
    QColor("violet"),
]
BODY_PEN_WIDTH = 6


def body_pen(pen_index: int) -> QPen:
    """바디 슬롯 인덱스에 해당하는 펜 (색상 순환)"""
    color = BODY_PEN_COLORS[pen_index % len(BODY_PEN_COLORS)]
    return QPen(QColor(color), BODY_PEN_WIDTH)


# 상태 메시지
RUNNING_STATUS_TEXT = "Running"
NO_SENSOR_STATUS_TEXT = "No ready Kinect found!"
SENSOR_NOT_AVAILABLE_STATUS_TEXT = "Kinect not available!"
SAVED_SCREENSHOT_STATUS_TEXT = "Screenshot saved to {path}"
FAILED_SCREENSHOT_STATUS_TEXT = "Failed to write screenshot to {path}"

SCREENSHOT_PREFIX = "KinectScreenshot-Color-"

# 미디어 선택 다이얼로그 확장자
VIDEO_EXTENSIONS = (".mp4", ".wma", ".avi", ".rmvb", ".rm", ".flash", ".mid")
