"""
kinect_viewer - Kinect body/color viewers and a media browser.
A PySide6-based tool for skeleton overlays and joint coordinate logging.
"""

__version__ = "0.1.0"

# Lazy imports to avoid circular dependencies
def __getattr__(name):
    if name in ("Body", "BodyFrame", "ColorFrame", "Joint", "JointType", "TrackingState", "HandState"):
        from . import models
        return getattr(models, name)
    elif name == "SkeletonRenderer":
        from .renderer import SkeletonRenderer
        return SkeletonRenderer
    elif name == "BodyFrameProcessor":
        from .pipeline import BodyFrameProcessor
        return BodyFrameProcessor
    elif name == "CoordinateLogWriter":
        from .coordinate_log import CoordinateLogWriter
        return CoordinateLogWriter
    elif name == "StatusText":
        from .status import StatusText
        return StatusText
    elif name == "RecordingSensor":
        from .sensor import RecordingSensor
        return RecordingSensor
    elif name == "BodyBasicsWindow":
        from .app import BodyBasicsWindow
        return BodyBasicsWindow
    elif name == "ColorBasicsWindow":
        from .app import ColorBasicsWindow
        return ColorBasicsWindow
    elif name == "MediaBrowserWindow":
        from .media_window import MediaBrowserWindow
        return MediaBrowserWindow
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Body",
    "BodyFrame",
    "ColorFrame",
    "Joint",
    "JointType",
    "TrackingState",
    "HandState",
    "SkeletonRenderer",
    "BodyFrameProcessor",
    "CoordinateLogWriter",
    "StatusText",
    "RecordingSensor",
    "BodyBasicsWindow",
    "ColorBasicsWindow",
    "MediaBrowserWindow",
    "__version__",
]


def main():
    """Entry point for the application."""
    from .app import run_app
    run_app()
