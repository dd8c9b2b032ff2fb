"""
SkeletonRenderer - draws tracked bodies onto a QPainter.
"""

from typing import Iterable, Mapping, Optional

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QColor, QPen, QBrush

from .models import (
    FrameEdge, HandState, Joint, JointType, Point2D, ProjectedBody, TrackingState
)
from .joints import filter_joints, rendered_bones
from .constants import (
    JOINT_THICKNESS, CLIP_BOUNDS_THICKNESS, HAND_SIZE,
    TRACKED_JOINT_COLOR, INFERRED_JOINT_COLOR,
    HAND_CLOSED_COLOR, HAND_OPEN_COLOR, HAND_LASSO_COLOR,
    CLIPPED_EDGE_COLOR, BACKGROUND_COLOR, INFERRED_BONE_PEN,
    DEPTH_WIDTH, DEPTH_HEIGHT, body_pen,
)


HAND_COLORS = {
    HandState.CLOSED: HAND_CLOSED_COLOR,
    HandState.OPEN: HAND_OPEN_COLOR,
    HandState.LASSO: HAND_LASSO_COLOR,
}


def bone_pen(joint0: Joint, joint1: Joint, drawing_pen: QPen) -> Optional[QPen]:
    """
    뼈대 펜 선택.
    한쪽이라도 NOT_TRACKED면 그리지 않고(None), 양쪽 모두 TRACKED일 때만
    바디 펜을 사용한다. 나머지는 추정(inferred) 펜.
    """
    if joint0.tracking_state == TrackingState.NOT_TRACKED or \
       joint1.tracking_state == TrackingState.NOT_TRACKED:
        return None
    if joint0.is_tracked and joint1.is_tracked:
        return drawing_pen
    return INFERRED_BONE_PEN


def joint_color(state: TrackingState) -> Optional[QColor]:
    if state == TrackingState.TRACKED:
        return TRACKED_JOINT_COLOR
    if state == TrackingState.INFERRED:
        return INFERRED_JOINT_COLOR
    return None


def hand_color(state: HandState) -> Optional[QColor]:
    return HAND_COLORS.get(state)


def _qpoint(point: Point2D) -> QPointF:
    return QPointF(point.x, point.y)


class SkeletonRenderer:
    """바디 프레임을 depth 공간 크기로 그리는 렌더러"""

    def __init__(self, display_width: int = DEPTH_WIDTH, display_height: int = DEPTH_HEIGHT):
        self.display_width = display_width
        self.display_height = display_height
        self.bones = rendered_bones()

    @property
    def display_rect(self) -> QRectF:
        return QRectF(0.0, 0.0, self.display_width, self.display_height)

    def draw_frame(self, painter, projected_bodies: Iterable[ProjectedBody]):
        """배경 + 트래킹 중인 모든 바디"""
        painter.save()
        try:
            painter.setClipRect(self.display_rect)
            painter.fillRect(self.display_rect, BACKGROUND_COLOR)

            for projected in projected_bodies:
                body = projected.body
                if not body.is_tracked:
                    continue
                self.draw_clipped_edges(painter, body.clipped_edges)
                self.draw_body(painter, body.joints, projected.points,
                               body_pen(projected.pen_index))

                left = projected.point(JointType.HAND_LEFT)
                if left is not None:
                    self.draw_hand(painter, body.hand_left_state, left)
                right = projected.point(JointType.HAND_RIGHT)
                if right is not None:
                    self.draw_hand(painter, body.hand_right_state, right)
        finally:
            painter.restore()

    def draw_body(self, painter, joints: Mapping[JointType, Joint],
                  points: Mapping[JointType, Point2D], drawing_pen: QPen):
        for joint_type0, joint_type1 in self.bones:
            self.draw_bone(painter, joints, points, joint_type0, joint_type1, drawing_pen)

        painter.setPen(Qt.PenStyle.NoPen)
        for joint_type, joint in filter_joints(joints).items():
            color = joint_color(joint.tracking_state)
            if color is None or joint_type not in points:
                continue
            painter.setBrush(QBrush(color))
            painter.drawEllipse(_qpoint(points[joint_type]), JOINT_THICKNESS, JOINT_THICKNESS)

    def draw_bone(self, painter, joints: Mapping[JointType, Joint],
                  points: Mapping[JointType, Point2D],
                  joint_type0: JointType, joint_type1: JointType, drawing_pen: QPen):
        pen = bone_pen(joints[joint_type0], joints[joint_type1], drawing_pen)
        if pen is None or joint_type0 not in points or joint_type1 not in points:
            return
        painter.setPen(pen)
        painter.drawLine(_qpoint(points[joint_type0]), _qpoint(points[joint_type1]))

    def draw_hand(self, painter, hand_state: HandState, position: Point2D):
        """손 상태 표시: 빨강=closed, 초록=open, 파랑=lasso"""
        color = hand_color(hand_state)
        if color is None:
            return
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(color))
        painter.drawEllipse(_qpoint(position), HAND_SIZE, HAND_SIZE)

    def draw_clipped_edges(self, painter, clipped_edges: FrameEdge):
        """바디가 화면 밖으로 잘린 가장자리에 막대 표시"""
        w, h, t = self.display_width, self.display_height, CLIP_BOUNDS_THICKNESS

        if clipped_edges & FrameEdge.BOTTOM:
            painter.fillRect(QRectF(0, h - t, w, t), CLIPPED_EDGE_COLOR)
        if clipped_edges & FrameEdge.TOP:
            painter.fillRect(QRectF(0, 0, w, t), CLIPPED_EDGE_COLOR)
        if clipped_edges & FrameEdge.LEFT:
            painter.fillRect(QRectF(0, 0, t, h), CLIPPED_EDGE_COLOR)
        if clipped_edges & FrameEdge.RIGHT:
            painter.fillRect(QRectF(w - t, 0, t, h), CLIPPED_EDGE_COLOR)
