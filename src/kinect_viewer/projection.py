"""
Projection of camera-space joints into the 2D depth (display) space.
"""

from typing import Dict, Mapping, Protocol

import numpy as np

from .models import CameraSpacePoint, Joint, JointType, Point2D
from .constants import INFERRED_Z_POSITION_CLAMP, DEPTH_WIDTH, DEPTH_HEIGHT


class CoordinateMapper(Protocol):
    """카메라 공간 -> depth 공간 매퍼 (센서가 제공)"""

    def map_camera_point_to_depth_space(self, point: CameraSpacePoint) -> Point2D:
        ...


def clamp_depth(point: CameraSpacePoint) -> CameraSpacePoint:
    """
    depth(z)가 음수로 보고되는 경우가 있어 0.1로 대체한다.
    그대로 매핑하면 (-inf, -inf)가 반환된다.
    """
    if point.z < 0:
        return CameraSpacePoint(point.x, point.y, INFERRED_Z_POSITION_CLAMP)
    return point


def project_point(point: CameraSpacePoint, mapper: CoordinateMapper) -> Point2D:
    return mapper.map_camera_point_to_depth_space(clamp_depth(point))


def project_joints(joints: Mapping[JointType, Joint],
                   mapper: CoordinateMapper) -> Dict[JointType, Point2D]:
    return {
        joint_type: project_point(joint.position, mapper)
        for joint_type, joint in joints.items()
    }


class DepthSpaceMapper:
    """
    Kinect v2 depth 카메라의 핀홀 모델.

    녹화 데이터 재생처럼 SDK 매퍼가 없을 때 사용한다.
    센서 좌표계는 y가 위쪽이므로 화면 y로 뒤집는다.
    """

    def __init__(self, focal_length: float = 365.5,
                 center_x: float = DEPTH_WIDTH / 2, center_y: float = DEPTH_HEIGHT / 2):
        self.focal_length = focal_length
        self.center_x = center_x
        self.center_y = center_y

    def map_points(self, points: np.ndarray) -> np.ndarray:
        """(N, 3) 카메라 좌표 배열 -> (N, 2) depth 좌표 배열"""
        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        z = points[:, 2]
        with np.errstate(divide="ignore", invalid="ignore"):
            u = self.center_x + self.focal_length * points[:, 0] / z
            v = self.center_y - self.focal_length * points[:, 1] / z
        return np.stack([u, v], axis=1)

    def map_camera_point_to_depth_space(self, point: CameraSpacePoint) -> Point2D:
        u, v = self.map_points(np.array([point.x, point.y, point.z]))[0]
        return Point2D(float(u), float(v))
