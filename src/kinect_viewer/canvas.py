"""
BodyCanvas / ColorCanvas - drawing surfaces for sensor frames.
"""

from typing import List, Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QPainter, QColor, QFont, QImage

from .models import ColorFrame, ProjectedBody
from .renderer import SkeletonRenderer
from .constants import DEPTH_WIDTH, DEPTH_HEIGHT


def fit_rect(source_w: float, source_h: float, target_w: float, target_h: float) -> QRectF:
    """비율을 유지하며 target 안에 중앙 정렬된 사각형"""
    if source_w <= 0 or source_h <= 0:
        return QRectF(0, 0, target_w, target_h)
    scale = min(target_w / source_w, target_h / source_h)
    w, h = source_w * scale, source_h * scale
    return QRectF((target_w - w) / 2, (target_h - h) / 2, w, h)


class BodyCanvas(QWidget):
    """스켈레톤 오버레이 캔버스"""

    def __init__(self, display_width: int = DEPTH_WIDTH, display_height: int = DEPTH_HEIGHT,
                 parent=None):
        super().__init__(parent)
        self.renderer = SkeletonRenderer(display_width, display_height)
        self.projected_bodies: List[ProjectedBody] = []

        self.setMinimumSize(display_width, display_height)
        self.setStyleSheet("background-color: #1a1a2e;")

    def set_bodies(self, projected_bodies: List[ProjectedBody]):
        self.projected_bodies = projected_bodies
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), QColor("#1a1a2e"))

            target = fit_rect(self.renderer.display_width, self.renderer.display_height,
                              self.width(), self.height())
            painter.translate(target.x(), target.y())
            painter.scale(target.width() / self.renderer.display_width,
                          target.height() / self.renderer.display_height)
            self.renderer.draw_frame(painter, self.projected_bodies)
        finally:
            painter.end()


def color_frame_to_image(frame: ColorFrame) -> QImage:
    """BGRA 버퍼 -> QImage (버퍼를 복사하므로 프레임과 수명 분리)"""
    pixels = frame.pixels
    if not pixels.flags["C_CONTIGUOUS"]:
        pixels = pixels.copy()
    image = QImage(pixels.data, frame.width, frame.height, frame.width * 4,
                   QImage.Format.Format_ARGB32)
    return image.copy()


class ColorCanvas(QWidget):
    """컬러 프레임 표시 캔버스"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.image: Optional[QImage] = None
        self.setMinimumSize(640, 360)
        self.setStyleSheet("background-color: #1a1a2e;")

    def set_frame(self, frame: Optional[ColorFrame]):
        if frame is None:
            return
        self.image = color_frame_to_image(frame)
        self.update()

    def current_image(self) -> Optional[QImage]:
        return self.image

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            painter.fillRect(self.rect(), QColor("#1a1a2e"))

            if self.image is None:
                painter.setPen(QColor("#ffffff"))
                painter.setFont(QFont("Segoe UI", 14))
                painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "Waiting for frames...")
                return

            target = fit_rect(self.image.width(), self.image.height(), self.width(), self.height())
            painter.drawImage(target, self.image)
        finally:
            painter.end()
