"""
Viewer configuration loaded from an optional JSON file.
"""

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = "kinect_joints.txt"
DEFAULT_FPS = 30
SENSOR_KINDS = ("recording", "kinect")


@dataclass(frozen=True)
class ViewerConfig:
    # 관절 좌표 로그 파일 (append-only)
    log_path: str = DEFAULT_LOG_PATH
    # 스크린샷 저장 폴더. 비어 있으면 OS 기본 사진 폴더
    pictures_dir: str = ""
    # 녹화 재생 폴더 (sensor == "recording"일 때)
    recording_dir: str = ""
    # 녹화 재생 속도
    fps: int = DEFAULT_FPS
    # "recording" / "kinect"
    sensor: str = "recording"

    def with_overrides(self, **overrides: Any) -> "ViewerConfig":
        """None이 아닌 값만 덮어쓴 새 설정"""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return _validated(replace(self, **changes))


def _as_str(v: Any, default: str = "") -> str:
    return str(v) if v is not None else str(default)


def _as_int(v: Any, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return int(default)


def _validated(cfg: ViewerConfig) -> ViewerConfig:
    sensor = cfg.sensor.strip().lower()
    if sensor not in SENSOR_KINDS:
        raise ConfigError(f"unknown sensor kind: {cfg.sensor!r} (expected one of {SENSOR_KINDS})")
    fps = cfg.fps if cfg.fps > 0 else DEFAULT_FPS
    log_path = cfg.log_path or DEFAULT_LOG_PATH
    return replace(cfg, sensor=sensor, fps=fps, log_path=log_path)


def parse_config(raw: Dict[str, Any]) -> ViewerConfig:
    return _validated(ViewerConfig(
        log_path=_as_str(raw.get("log_path"), DEFAULT_LOG_PATH),
        pictures_dir=_as_str(raw.get("pictures_dir"), ""),
        recording_dir=_as_str(raw.get("recording_dir"), ""),
        fps=_as_int(raw.get("fps"), DEFAULT_FPS),
        sensor=_as_str(raw.get("sensor"), "recording"),
    ))


def load_config(path: Optional[str] = None) -> ViewerConfig:
    """설정 파일이 없으면 기본값, 형식이 잘못되면 ConfigError"""
    if not path:
        return ViewerConfig()
    p = Path(path).expanduser()
    if not p.exists():
        logger.warning("Config file not found, using defaults: %s", p)
        return ViewerConfig()
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot read config {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"config root must be an object: {p}")
    return parse_config(raw)
