"""系统托盘通知。"""
from typing import Any, Callable, Dict, Mapping, Optional

from PyQt6.QtWidgets import QSystemTrayIcon

from forget_me_not.config import NOTIFICATION_DURATION_MS
from forget_me_not.logger_config import setup_logger

logger = setup_logger(__name__)


class TrayNotificationDispatcher:
    """通过托盘气泡立即弹出通知；点击气泡时把最近一条的 payload 交给 on_click。"""

    def __init__(
        self,
        tray: QSystemTrayIcon,
        duration_ms: int = NOTIFICATION_DURATION_MS,
        on_click: Optional[Callable[[Dict[str, Any]], None]] = None,
    ):
        self._tray = tray
        self._duration_ms = duration_ms
        self._on_click = on_click
        self._last_payload: Dict[str, Any] = {}
        tray.messageClicked.connect(self._clicked)

    def notify(self, title: str, body: str, payload: Mapping[str, Any]) -> bool:
        if not QSystemTrayIcon.supportsMessages() or not self._tray.isVisible():
            logger.warning("tray messages unavailable, dropping notification: %s", body)
            return False
        self._last_payload = dict(payload)
        self._tray.showMessage(title, body, QSystemTrayIcon.MessageIcon.Information, self._duration_ms)
        return True

    def _clicked(self) -> None:
        if self._on_click is not None and self._last_payload:
            self._on_click(dict(self._last_payload))
