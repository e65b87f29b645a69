"""定位节流：距上次放行超过时间间隔，或移动超过距离阈值时放行。"""
from typing import Optional

from forget_me_not.geo import distance
from forget_me_not.platform.interfaces import LocationFix, LocationUpdateConfig


class UpdateGate:
    """宿主定位源通常更频繁地上报，这里按 30 秒 / 50 米的节奏筛选。"""

    def __init__(self, config: LocationUpdateConfig):
        self._config = config
        self._last: Optional[LocationFix] = None

    def accept(self, fix: LocationFix) -> bool:
        last = self._last
        if last is not None:
            elapsed_ms = (fix.timestamp - last.timestamp).total_seconds() * 1000
            moved_m = distance(last.latitude, last.longitude, fix.latitude, fix.longitude)
            if elapsed_ms < self._config.min_interval_ms and moved_m < self._config.min_distance_m:
                return False
        self._last = fix
        return True

    def reset(self) -> None:
        self._last = None
