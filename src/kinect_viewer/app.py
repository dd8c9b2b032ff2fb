"""
Kinect Viewer - main windows and command line entry point.
"""

import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QStatusBar, QPushButton
)

from .models import BodyFrame, ColorFrame
from .canvas import BodyCanvas, ColorCanvas
from .controls import bind_status_bar, BUTTON_STYLE, WINDOW_STYLE
from .config import ViewerConfig, load_config
from .coordinate_log import CoordinateLogWriter
from .errors import KinectViewerError
from .pipeline import BodyFrameProcessor
from .screenshot import default_pictures_dir, save_screenshot
from .sensor import SensorSource, create_sensor
from .status import StatusText, availability_status_text, screenshot_status_text

logger = logging.getLogger(__name__)


class SensorWindow(QMainWindow):
    """센서 수명 관리 공통 윈도우 (생성 시 열고 닫을 때 해제)"""

    def __init__(self, sensor: SensorSource, status: StatusText, title: str):
        super().__init__()
        self.sensor: Optional[SensorSource] = sensor
        self.status = status
        self._frames_connected = False

        self.setWindowTitle(title)
        self.setStyleSheet(WINDOW_STYLE)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        bind_status_bar(self.status_bar, self.status)

        self.sensor.availability_changed.connect(self._on_availability_changed)
        self.sensor.open()
        self.status.set(availability_status_text(self.sensor.is_available, initial=True))

    def _on_availability_changed(self, available: bool):
        self.status.set(availability_status_text(available))

    def _connect_frames(self):
        raise NotImplementedError

    def _disconnect_frames(self):
        raise NotImplementedError

    def showEvent(self, event):
        if self.sensor is not None and not self._frames_connected:
            self._connect_frames()
            self._frames_connected = True
        super().showEvent(event)

    def release(self):
        """구독 해제 후 센서 종료 (여러 번 호출해도 안전)"""
        if self.sensor is not None:
            if self._frames_connected:
                self._disconnect_frames()
                self._frames_connected = False
            self.sensor.availability_changed.disconnect(self._on_availability_changed)
            self.sensor.close()
            self.sensor = None

    def closeEvent(self, event):
        self.release()
        super().closeEvent(event)


class BodyBasicsWindow(SensorWindow):
    """스켈레톤 오버레이 + 관절 좌표 로그"""

    def __init__(self, sensor: SensorSource, status: StatusText, config: ViewerConfig):
        log_writer = CoordinateLogWriter(config.log_path).open()
        try:
            super().__init__(sensor, status, "Body Basics")
        except Exception:
            log_writer.close()
            raise
        self.log_writer: Optional[CoordinateLogWriter] = log_writer

        self.processor = BodyFrameProcessor(sensor.coordinate_mapper, self.log_writer)
        width, height = sensor.display_size
        self.canvas = BodyCanvas(width, height)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.addWidget(self.canvas)
        self.setCentralWidget(central)

    def _connect_frames(self):
        self.sensor.body_frame_arrived.connect(self._on_body_frame)

    def _disconnect_frames(self):
        self.sensor.body_frame_arrived.disconnect(self._on_body_frame)

    def _on_body_frame(self, frame: Optional[BodyFrame]):
        if frame is None:
            return
        try:
            projected = self.processor.process(frame)
        except OSError:
            logger.exception("Failed to append joint coordinates to %s", self.log_writer.path)
            raise
        self.canvas.set_bodies(projected)

    def release(self):
        super().release()
        if self.log_writer is not None:
            self.log_writer.close()
            self.log_writer = None


class ColorBasicsWindow(SensorWindow):
    """컬러 영상 + 스크린샷"""

    def __init__(self, sensor: SensorSource, status: StatusText, config: ViewerConfig):
        super().__init__(sensor, status, "Color Basics")
        self.pictures_dir = config.pictures_dir or default_pictures_dir()

        self.canvas = ColorCanvas()
        self.screenshot_btn = QPushButton("Screenshot")
        self.screenshot_btn.setStyleSheet(BUTTON_STYLE)
        self.screenshot_btn.clicked.connect(self.take_screenshot)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.addWidget(self.canvas, 1)
        button_row = QHBoxLayout()
        button_row.addStretch(1)
        button_row.addWidget(self.screenshot_btn)
        layout.addLayout(button_row)
        self.setCentralWidget(central)

    def _connect_frames(self):
        self.sensor.color_frame_arrived.connect(self._on_color_frame)

    def _disconnect_frames(self):
        self.sensor.color_frame_arrived.disconnect(self._on_color_frame)

    def _on_color_frame(self, frame: Optional[ColorFrame]):
        self.canvas.set_frame(frame)

    def take_screenshot(self):
        image = self.canvas.current_image()
        if image is None:
            return
        path, ok = save_screenshot(image, self.pictures_dir)
        self.status.set(screenshot_status_text(path, ok))



def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kinect-viewer", description="Kinect body/color viewers and media browser")
    parser.add_argument("mode", choices=("body", "color", "media"), help="window to open")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--sensor", choices=("recording", "kinect"), help="frame source")
    parser.add_argument("--recording", dest="recording_dir", help="recording folder to replay")
    parser.add_argument("--log-path", dest="log_path", help="joint coordinate log file")
    parser.add_argument("--pictures-dir", dest="pictures_dir", help="screenshot folder")
    parser.add_argument("--fps", type=int, help="recording replay rate")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def create_window(mode: str, config: ViewerConfig) -> QMainWindow:
    if mode == "media":
        # QtMultimedia는 미디어 창에서만 로드
        from .media_window import MediaBrowserWindow
        return MediaBrowserWindow()
    status = StatusText()
    if mode == "body":
        return BodyBasicsWindow(create_sensor(config, body=True), status, config)
    return ColorBasicsWindow(create_sensor(config, body=False, color=True), status, config)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stdout,
        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv[:1] if argv is not None else sys.argv)
    app.setStyle("Fusion")

    try:
        config = load_config(args.config).with_overrides(
            sensor=args.sensor,
            recording_dir=args.recording_dir,
            log_path=args.log_path,
            pictures_dir=args.pictures_dir,
            fps=args.fps,
        )
        window = create_window(args.mode, config)
    except (KinectViewerError, OSError) as e:
        logger.error("%s", e)
        return 1

    window.show()
    return app.exec()


def run_app():
    """Entry point for the application."""
    sys.exit(main())


if __name__ == "__main__":
    run_app()
