"""
MediaLibrary - remembered video files for the media browser.
"""

import os
from typing import List, Optional

from .constants import VIDEO_EXTENSIONS


def video_file_filter() -> str:
    """QFileDialog 이름 필터 (예: 'Video files (*.mp4 *.wma ...)')"""
    patterns = " ".join(f"*{ext}" for ext in VIDEO_EXTENSIONS)
    return f"Video files ({patterns})"


class MediaLibrary:
    """
    선택한 영상 파일 목록.
    폴더 목록과 표시 이름 목록은 같은 인덱스를 공유한다 (삭제 없음).
    """

    def __init__(self):
        self.directories: List[str] = []
        self.names: List[str] = []

    def __len__(self) -> int:
        return len(self.names)

    def add(self, path: str) -> str:
        """파일 추가 후 표시 이름 반환"""
        directory, name = os.path.split(path)
        self.directories.append(directory)
        self.names.append(name)
        return name

    def path_at(self, index: int) -> Optional[str]:
        if index < 0 or index >= len(self.names):
            return None
        return os.path.join(self.directories[index], self.names[index])
