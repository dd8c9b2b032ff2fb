"""
Per-frame body processing: filter, log and project tracked bodies.
"""

from typing import List, Optional

from .models import BodyFrame, ProjectedBody
from .joints import filter_joints
from .projection import CoordinateMapper, project_joints
from .coordinate_log import CoordinateLogWriter


class BodyFrameProcessor:
    """바디 프레임 -> 렌더링용 ProjectedBody 목록 (좌표 로그 기록 포함)"""

    def __init__(self, mapper: CoordinateMapper,
                 log_writer: Optional[CoordinateLogWriter] = None):
        self.mapper = mapper
        self.log_writer = log_writer

    def process(self, frame: Optional[BodyFrame]) -> List[ProjectedBody]:
        if frame is None:
            return []

        # 로그는 클램프 전 원본 좌표, 프레임당 한 번 기록
        if self.log_writer is not None:
            self.log_writer.write_frame(frame)

        projected = []
        for pen_index, body in enumerate(frame.bodies):
            if not body.is_tracked:
                continue
            points = project_joints(filter_joints(body.joints), self.mapper)
            projected.append(ProjectedBody(body=body, points=points, pen_index=pen_index))
        return projected
