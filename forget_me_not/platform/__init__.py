"""宿主平台服务：存储、权限、定位、通知的接口与桌面实现。"""
from forget_me_not.platform.gate import UpdateGate
from forget_me_not.platform.interfaces import (
    KeyValueStore,
    LocationCallback,
    LocationFix,
    LocationProvider,
    LocationSubscription,
    LocationUpdateConfig,
    NotificationDispatcher,
    PermissionService,
    PermissionStatus,
)

__all__ = [
    "KeyValueStore",
    "LocationCallback",
    "LocationFix",
    "LocationProvider",
    "LocationSubscription",
    "LocationUpdateConfig",
    "NotificationDispatcher",
    "PermissionService",
    "PermissionStatus",
    "UpdateGate",
]
