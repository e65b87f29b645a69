"""桌面端权限：没有系统弹窗，按宿主能力判断。"""
from PyQt6.QtPositioning import QGeoPositionInfoSource
from PyQt6.QtWidgets import QSystemTrayIcon

from forget_me_not.config import BACKGROUND_LOCATION_ENABLED
from forget_me_not.platform.interfaces import PermissionStatus


def _status(granted: bool) -> PermissionStatus:
    return PermissionStatus.GRANTED if granted else PermissionStatus.DENIED


class QtPermissionService:
    """有定位源即视为前台定位可用；托盘常驻即视为可后台运行。"""

    def request_foreground_location(self) -> PermissionStatus:
        return _status(bool(QGeoPositionInfoSource.availableSources()))

    def request_background_location(self) -> PermissionStatus:
        return _status(BACKGROUND_LOCATION_ENABLED and bool(QGeoPositionInfoSource.availableSources()))

    def request_notifications(self) -> PermissionStatus:
        return _status(QSystemTrayIcon.isSystemTrayAvailable() and QSystemTrayIcon.supportsMessages())
