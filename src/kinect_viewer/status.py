"""
Observable status text shared between sensor callbacks and the UI.
"""

from PySide6.QtCore import QObject, Signal

from .constants import (
    RUNNING_STATUS_TEXT, NO_SENSOR_STATUS_TEXT, SENSOR_NOT_AVAILABLE_STATUS_TEXT,
    SAVED_SCREENSHOT_STATUS_TEXT, FAILED_SCREENSHOT_STATUS_TEXT,
)


class StatusText(QObject):
    """값이 바뀔 때만 changed 시그널을 내보내는 상태 문자열"""

    changed = Signal(str)

    def __init__(self, initial: str = "", parent=None):
        super().__init__(parent)
        self._value = initial

    @property
    def value(self) -> str:
        return self._value

    def set(self, text: str) -> bool:
        """값이 바뀌었으면 알리고 True 반환"""
        if text == self._value:
            return False
        self._value = text
        self.changed.emit(text)
        return True

    def subscribe(self, callback):
        self.changed.connect(callback)

    def unsubscribe(self, callback):
        self.changed.disconnect(callback)


def availability_status_text(available: bool, initial: bool = False) -> str:
    """센서 가용성 -> 상태 메시지 (시작 시와 이후 변경 시 문구가 다름)"""
    if available:
        return RUNNING_STATUS_TEXT
    return NO_SENSOR_STATUS_TEXT if initial else SENSOR_NOT_AVAILABLE_STATUS_TEXT


def screenshot_status_text(path: str, ok: bool) -> str:
    template = SAVED_SCREENSHOT_STATUS_TEXT if ok else FAILED_SCREENSHOT_STATUS_TEXT
    return template.format(path=path)
