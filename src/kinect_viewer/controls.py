"""
Control widgets - StatusBarBinding helper and MediaControlBar.
"""

from PySide6.QtWidgets import QWidget, QHBoxLayout, QPushButton, QLabel, QStatusBar
from PySide6.QtCore import Signal

from .status import StatusText


WINDOW_STYLE = """
    QMainWindow {
        background-color: #1a1a2e;
    }
    QStatusBar {
        background-color: #16213e;
        color: #e0e0e0;
    }
"""

BUTTON_STYLE = """
    QPushButton {
        background-color: #4ECDC4;
        color: #1a1a2e;
        border: none;
        font-size: 13px;
        font-weight: bold;
        border-radius: 6px;
        padding: 6px 14px;
    }
    QPushButton:hover {
        background-color: #5FE6DD;
    }
    QPushButton:pressed {
        background-color: #3DBDB5;
    }
    QPushButton:disabled {
        background-color: #2d2d44;
        color: #808080;
    }
"""


def bind_status_bar(status_bar: QStatusBar, status: StatusText):
    """StatusText 값을 상태바에 표시"""
    status_bar.showMessage(status.value)
    status.subscribe(status_bar.showMessage)


class MediaControlBar(QWidget):
    """하단 재생 컨트롤 바"""

    open_requested = Signal()
    playback_toggled = Signal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.is_playing = False
        self._setup_ui()

    def _setup_ui(self):
        self.setFixedHeight(56)
        self.setObjectName("mediaControlBar")
        self.setStyleSheet("""
            #mediaControlBar {
                background-color: #16213e;
                border-top: 1px solid #3d3d5c;
            }
            QLabel {
                color: #e0e0e0;
                background: transparent;
            }
        """ + BUTTON_STYLE)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(15, 8, 15, 8)
        layout.setSpacing(15)

        self.open_btn = QPushButton("Open...")
        self.open_btn.clicked.connect(self.open_requested.emit)
        layout.addWidget(self.open_btn)

        self.play_btn = QPushButton("▶")
        self.play_btn.setFixedWidth(48)
        self.play_btn.setEnabled(False)
        self.play_btn.clicked.connect(self._toggle_playback)
        layout.addWidget(self.play_btn)

        self.source_label = QLabel("")
        layout.addWidget(self.source_label, 1)

    def set_source(self, name: str):
        self.source_label.setText(name)
        self.play_btn.setEnabled(bool(name))
        self.stop_playback()

    def _toggle_playback(self):
        self.is_playing = not self.is_playing
        self.play_btn.setText("■" if self.is_playing else "▶")
        self.playback_toggled.emit(self.is_playing)

    def stop_playback(self):
        self.is_playing = False
        self.play_btn.setText("▶")
