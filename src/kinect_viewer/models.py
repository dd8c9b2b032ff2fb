"""
Data models for body tracking and color frames.
"""

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Dict, List, Optional

import numpy as np


class JointType(IntEnum):
    """Kinect v2 관절 종류 (SDK 순서)"""
    SPINE_BASE = 0
    SPINE_MID = 1
    NECK = 2
    HEAD = 3
    SHOULDER_LEFT = 4
    ELBOW_LEFT = 5
    WRIST_LEFT = 6
    HAND_LEFT = 7
    SHOULDER_RIGHT = 8
    ELBOW_RIGHT = 9
    WRIST_RIGHT = 10
    HAND_RIGHT = 11
    HIP_LEFT = 12
    KNEE_LEFT = 13
    ANKLE_LEFT = 14
    FOOT_LEFT = 15
    HIP_RIGHT = 16
    KNEE_RIGHT = 17
    ANKLE_RIGHT = 18
    FOOT_RIGHT = 19
    SPINE_SHOULDER = 20
    HAND_TIP_LEFT = 21
    THUMB_LEFT = 22
    HAND_TIP_RIGHT = 23
    THUMB_RIGHT = 24

    @property
    def label(self) -> str:
        """CamelCase 이름 (예: SpineShoulder)"""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def from_label(cls, label: str) -> "JointType":
        key = label.strip()
        for joint_type in cls:
            if key in (joint_type.label, joint_type.name):
                return joint_type
        raise ValueError(f"unknown joint: {label!r}")


class TrackingState(IntEnum):
    NOT_TRACKED = 0
    INFERRED = 1
    TRACKED = 2


class HandState(IntEnum):
    UNKNOWN = 0
    NOT_TRACKED = 1
    OPEN = 2
    CLOSED = 3
    LASSO = 4


class FrameEdge(IntFlag):
    """바디 데이터가 잘린 화면 가장자리"""
    NONE = 0
    RIGHT = 1
    LEFT = 2
    TOP = 4
    BOTTOM = 8


@dataclass(frozen=True)
class CameraSpacePoint:
    """센서 공간 3D 좌표 (미터)"""
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Point2D:
    """화면(depth) 공간 2D 좌표"""
    x: float
    y: float


@dataclass(frozen=True)
class Joint:
    joint_type: JointType
    position: CameraSpacePoint
    tracking_state: TrackingState = TrackingState.NOT_TRACKED

    @property
    def is_tracked(self) -> bool:
        return self.tracking_state == TrackingState.TRACKED


def empty_joints() -> Dict[JointType, Joint]:
    """모든 관절을 NOT_TRACKED 상태로 채운 관절 집합"""
    origin = CameraSpacePoint(0.0, 0.0, 0.0)
    return {jt: Joint(jt, origin, TrackingState.NOT_TRACKED) for jt in JointType}


@dataclass
class Body:
    """한 사람의 트래킹 데이터"""
    is_tracked: bool
    joints: Dict[JointType, Joint] = field(default_factory=empty_joints)
    hand_left_state: HandState = HandState.UNKNOWN
    hand_right_state: HandState = HandState.UNKNOWN
    clipped_edges: FrameEdge = FrameEdge.NONE
    tracking_id: int = 0

    @classmethod
    def untracked(cls) -> "Body":
        return cls(is_tracked=False)


@dataclass
class BodyFrame:
    """한 프레임의 전체 바디 슬롯"""
    frame_number: int
    bodies: List[Body]

    @property
    def tracked_bodies(self) -> List[Body]:
        return [body for body in self.bodies if body.is_tracked]


@dataclass
class ColorFrame:
    """BGRA 컬러 프레임 (H x W x 4, uint8)"""
    frame_number: int
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass
class ProjectedBody:
    """렌더링용으로 투영된 바디 (한 프레임 동안만 유효)"""
    body: Body
    points: Dict[JointType, Point2D]
    pen_index: int

    def point(self, joint_type: JointType) -> Optional[Point2D]:
        return self.points.get(joint_type)
