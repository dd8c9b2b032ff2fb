"""
Exception types.
"""


class KinectViewerError(Exception):
    """kinect_viewer 기본 예외"""


class SensorError(KinectViewerError):
    """센서를 열 수 없거나 SDK를 사용할 수 없음"""


class ConfigError(KinectViewerError):
    """설정 파일을 읽을 수 없음"""
