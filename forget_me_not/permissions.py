"""权限：通知 + 前台定位 + 后台定位，全部授予才启用地理围栏。"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from forget_me_not.errors import PermissionDenied
from forget_me_not.logger_config import setup_logger
from forget_me_not.platform.interfaces import PermissionService, PermissionStatus

logger = setup_logger(__name__)


class LocationPermission(str, Enum):
    """定位权限级别。"""
    FULL = "full"              # 前台 + 后台
    FOREGROUND = "foreground"  # 仅前台
    DENIED = "denied"
    UNKNOWN = "unknown"        # 尚未请求


class PermissionSnapshot(BaseModel):
    """一次权限请求的结果。"""
    location: LocationPermission = Field(LocationPermission.UNKNOWN, description="定位权限级别")
    notifications: bool = Field(False, description="是否允许通知")

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    @property
    def monitoring_allowed(self) -> bool:
        return self.location == LocationPermission.FULL and self.notifications

    def require_monitoring(self) -> None:
        """不满足地理围栏所需权限时抛 PermissionDenied。"""
        if self.location != LocationPermission.FULL:
            raise PermissionDenied(
                f"location permission is {LocationPermission(self.location).value}, background location required"
            )
        if not self.notifications:
            raise PermissionDenied("notification permission denied")


def request_permissions(service: PermissionService) -> PermissionSnapshot:
    """依次请求通知、前台定位；前台获准后再请求后台定位。请求出错按拒绝处理。"""
    try:
        notifications = service.request_notifications() == PermissionStatus.GRANTED
        if service.request_foreground_location() != PermissionStatus.GRANTED:
            location = LocationPermission.DENIED
        elif service.request_background_location() == PermissionStatus.GRANTED:
            location = LocationPermission.FULL
        else:
            location = LocationPermission.FOREGROUND
    except Exception as e:  # noqa: BLE001
        logger.error("error requesting permissions: %s", e)
        return PermissionSnapshot(location=LocationPermission.DENIED, notifications=False)
    snapshot = PermissionSnapshot(location=location, notifications=notifications)
    logger.info("permissions: location=%s notifications=%s", location.value, notifications)
    return snapshot
