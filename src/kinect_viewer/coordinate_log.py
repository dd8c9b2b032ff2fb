"""
Append-only text log of raw joint coordinates.

Line format (one line per tracked body per frame)::

    "<x> <y> <z> \\t<x> <y> <z> \\t...\\n"
"""

import logging
import os
from typing import IO, Optional

import numpy as np

from .models import Body, BodyFrame, CameraSpacePoint
from .joints import filter_joints

logger = logging.getLogger(__name__)


def format_coordinate(value: float) -> str:
    """단정밀도 값의 최단 문자열 표현"""
    return str(np.float32(value))


def format_joint(position: CameraSpacePoint) -> str:
    return "{0} {1} {2} \t".format(
        format_coordinate(position.x),
        format_coordinate(position.y),
        format_coordinate(position.z),
    )


def format_body_line(body: Body) -> str:
    """필터를 통과한 관절의 원본(클램프 전) 좌표 한 줄"""
    fields = [format_joint(joint.position) for joint in filter_joints(body.joints).values()]
    return "".join(fields) + "\n"


class CoordinateLogWriter:
    """
    시작 시 한 번 열고 종료 시 닫는 좌표 로그 파일.
    쓰기 오류(OSError)는 호출자에게 그대로 전달된다.
    """

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[IO[str]] = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self) -> "CoordinateLogWriter":
        if self._file is None:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            self._file = open(self.path, "a", encoding="utf-8", newline="")
            logger.info("Coordinate log opened: %s", self.path)
        return self

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.info("Coordinate log closed: %s", self.path)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _require_open(self) -> IO[str]:
        if self._file is None:
            raise RuntimeError(f"coordinate log is not open: {self.path}")
        return self._file

    def write_frame(self, frame: BodyFrame) -> int:
        """트래킹 중인 바디마다 한 줄씩 기록, 기록한 줄 수 반환"""
        handle = self._require_open()
        count = 0
        for body in frame.tracked_bodies:
            handle.write(format_body_line(body))
            count += 1
        handle.flush()
        return count
