"""入口：托盘常驻，后台定位到达提醒地点时弹出通知。"""
import sys
from typing import Any, Dict

from PyQt6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from forget_me_not import __version__
from forget_me_not.config import ensure_dirs
from forget_me_not.logger_config import configure_root_logger, setup_logger
from forget_me_not.platform.qt_location import QtLocationProvider
from forget_me_not.platform.qt_notify import TrayNotificationDispatcher
from forget_me_not.platform.qt_permissions import QtPermissionService
from forget_me_not.services import build_services
from forget_me_not.storage.kv import JsonFileKeyValueStore

logger = setup_logger(__name__)


def main() -> None:
    ensure_dirs()
    configure_root_logger()
    app = QApplication(sys.argv)
    app.setApplicationName("Forget Me Not")
    app.setApplicationVersion(__version__)
    # 没有窗口，退出只能走托盘菜单
    app.setQuitOnLastWindowClosed(False)

    icon = app.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
    tray = QSystemTrayIcon(icon, app)
    tray.setToolTip("Forget Me Not")
    menu = QMenu()
    menu.addAction("Quit").triggered.connect(app.quit)
    tray.setContextMenu(menu)
    tray.show()

    def on_notification_clicked(payload: Dict[str, Any]) -> None:
        logger.info("notification opened for reminder %s", payload.get("reminderId"))

    services = build_services(
        store=JsonFileKeyValueStore(),
        location_provider=QtLocationProvider(app),
        dispatcher=TrayNotificationDispatcher(tray, on_click=on_notification_clicked),
    )
    snapshot = services.start(QtPermissionService())
    if not snapshot.monitoring_allowed:
        tray.setToolTip("Location permission is required for reminders to work")
    app.aboutToQuit.connect(services.shutdown)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
