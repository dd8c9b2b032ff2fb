"""
Screenshot saving for the color viewer.
"""

import logging
import os
from datetime import datetime
from typing import Optional, Tuple

from PySide6.QtCore import QStandardPaths
from PySide6.QtGui import QImage

from .constants import SCREENSHOT_PREFIX

logger = logging.getLogger(__name__)


def default_pictures_dir() -> str:
    return QStandardPaths.writableLocation(QStandardPaths.StandardLocation.PicturesLocation)


def screenshot_path(directory: str, now: Optional[datetime] = None) -> str:
    """KinectScreenshot-Color-<hh-mm-ss>.png (12시간제)"""
    now = now or datetime.now()
    return os.path.join(directory, f"{SCREENSHOT_PREFIX}{now.strftime('%I-%M-%S')}.png")


def save_screenshot(image: QImage, directory: str,
                    now: Optional[datetime] = None) -> Tuple[str, bool]:
    """PNG 저장. (경로, 성공 여부) 반환, 실패해도 예외를 내지 않는다"""
    path = screenshot_path(directory, now)
    try:
        ok = image.save(path, "PNG")
    except OSError:
        logger.exception("Screenshot write failed: %s", path)
        ok = False
    if ok:
        logger.info("Screenshot saved: %s", path)
    else:
        logger.warning("Failed to write screenshot: %s", path)
    return path, ok
