"""
Media browser window - video file list and QtMultimedia player.
"""

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QFileDialog, QStatusBar, QSplitter, QListWidget
)
from PySide6.QtCore import Qt, QUrl, Signal
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput
from PySide6.QtMultimediaWidgets import QVideoWidget

from .controls import MediaControlBar, WINDOW_STYLE
from .media import MediaLibrary, video_file_filter


class PlaybackView(QVideoWidget):
    """포커스를 받으면 focused 시그널 발생"""

    focused = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def focusInEvent(self, event):
        super().focusInEvent(event)
        self.focused.emit()


class MediaBrowserWindow(QMainWindow):
    """영상 파일 목록 + 플레이어"""

    def __init__(self):
        super().__init__()
        self.library = MediaLibrary()
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        self.setWindowTitle("Class Assessment")
        self.setMinimumSize(1000, 640)
        self.setStyleSheet(WINDOW_STYLE + """
            QListWidget {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
            }
            QListWidget::item:selected {
                background-color: #4ECDC4;
                color: #1a1a2e;
            }
        """)

        central = QWidget()
        self.setCentralWidget(central)
        outer_layout = QVBoxLayout(central)
        outer_layout.setContentsMargins(0, 0, 0, 0)
        outer_layout.setSpacing(0)

        self.file_list = QListWidget()
        self.file_list.setFixedWidth(260)
        self.video_view = PlaybackView()

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.file_list)
        splitter.addWidget(self.video_view)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        outer_layout.addWidget(splitter, 1)

        self.control_bar = MediaControlBar()
        outer_layout.addWidget(self.control_bar)

        self.player = QMediaPlayer(self)
        self.audio_output = QAudioOutput(self)
        self.player.setAudioOutput(self.audio_output)
        self.player.setVideoOutput(self.video_view)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

    def _connect_signals(self):
        self.control_bar.open_requested.connect(self._open_file)
        self.control_bar.playback_toggled.connect(self._toggle_playback)
        self.file_list.itemSelectionChanged.connect(self._on_selection_changed)
        self.video_view.focused.connect(self._load_selected)

    def _open_file(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open video", "", video_file_filter())
        if path:
            self.add_file(path)

    def add_file(self, path: str):
        name = self.library.add(path)
        self.file_list.addItem(name)
        self.status_bar.showMessage(f"✓ Added {name}")

    def _on_selection_changed(self):
        row = self.file_list.currentRow()
        if self.file_list.selectedItems() and row >= 0:
            self.file_list.setToolTip(self.file_list.item(row).text())
        else:
            self.file_list.setToolTip("")

    def _load_selected(self):
        path = self.library.path_at(self.file_list.currentRow())
        if path is None:
            return
        # 자동 재생하지 않음
        self.player.setSource(QUrl.fromLocalFile(path))
        self.control_bar.set_source(self.file_list.currentItem().text())
        self.status_bar.showMessage(path)

    def _toggle_playback(self, playing: bool):
        if playing:
            self.player.play()
        else:
            self.player.pause()

