"""核心逻辑依赖的外部协作者接口。"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Protocol

from forget_me_not.config import (
    LOCATION_ACCURACY,
    LOCATION_MIN_DISTANCE_M,
    LOCATION_MIN_INTERVAL_MS,
)


class PermissionStatus(str, Enum):
    """单项权限请求结果。"""
    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True)
class LocationFix:
    """一次定位结果。"""
    latitude: float
    longitude: float
    timestamp: datetime


@dataclass(frozen=True)
class LocationUpdateConfig:
    """后台定位参数：时间间隔与移动距离，先满足者触发。"""
    accuracy: str = LOCATION_ACCURACY
    min_interval_ms: int = LOCATION_MIN_INTERVAL_MS
    min_distance_m: float = LOCATION_MIN_DISTANCE_M


LocationCallback = Callable[[LocationFix], None]


class KeyValueStore(Protocol):
    """按键读写原始字节的持久化服务。"""

    def get(self, key: str) -> Optional[bytes]:
        ...

    def set(self, key: str, raw: bytes) -> bool:
        ...


class PermissionService(Protocol):
    """宿主的权限请求。"""

    def request_foreground_location(self) -> PermissionStatus:
        ...

    def request_background_location(self) -> PermissionStatus:
        ...

    def request_notifications(self) -> PermissionStatus:
        ...


class LocationSubscription(Protocol):
    """定位订阅句柄。"""

    def stop(self) -> None:
        ...


class LocationProvider(Protocol):
    """持续定位：按配置把 LocationFix 推给回调。"""

    def start_updates(self, config: LocationUpdateConfig, callback: LocationCallback) -> LocationSubscription:
        ...


class NotificationDispatcher(Protocol):
    """立即弹出一条用户可见的通知。"""

    def notify(self, title: str, body: str, payload: Mapping[str, Any]) -> bool:
        ...
