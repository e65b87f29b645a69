"""地理围栏会话：后台定位订阅在进程内最多启动一次。"""
import threading
from enum import Enum
from typing import Callable, Optional

from forget_me_not.logger_config import setup_logger
from forget_me_not.platform.interfaces import (
    LocationFix,
    LocationProvider,
    LocationSubscription,
    LocationUpdateConfig,
)

logger = setup_logger(__name__)


class SessionState(str, Enum):
    """会话状态。"""
    INACTIVE = "inactive"
    ACTIVE = "active"


class GeofencingSession:
    """持有定位订阅；回调在构造时就绑定到具体的处理函数（通常是判定器）。"""

    def __init__(
        self,
        provider: LocationProvider,
        on_fix: Callable[[LocationFix], object],
        config: Optional[LocationUpdateConfig] = None,
    ):
        self._provider = provider
        self._on_fix = on_fix
        self._config = config or LocationUpdateConfig()
        self._lock = threading.Lock()
        self._state = SessionState.INACTIVE
        self._subscription: Optional[LocationSubscription] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == SessionState.ACTIVE

    @property
    def config(self) -> LocationUpdateConfig:
        return self._config

    def ensure_started(self, permission_granted: bool) -> bool:
        """需要时启动定位订阅；已启动则什么也不做。返回调用后是否处于启动状态。"""
        if not permission_granted:
            logger.info("background location permission not granted, geofencing stays inactive")
            return self.is_active
        with self._lock:
            if self._state == SessionState.ACTIVE:
                return True
            try:
                self._subscription = self._provider.start_updates(self._config, self._deliver)
            except Exception as e:  # noqa: BLE001
                logger.error("could not start location updates: %s", e)
                return False
            self._state = SessionState.ACTIVE
        logger.info(
            "geofencing started: every %d ms or %.0f m (%s accuracy)",
            self._config.min_interval_ms, self._config.min_distance_m, self._config.accuracy,
        )
        return True

    def stop(self) -> None:
        """进程退出时释放订阅。"""
        with self._lock:
            if self._state == SessionState.INACTIVE:
                return
            subscription, self._subscription = self._subscription, None
            self._state = SessionState.INACTIVE
        if subscription is not None:
            try:
                subscription.stop()
            except Exception as e:  # noqa: BLE001
                logger.warning("error while stopping location updates: %s", e)
        logger.info("geofencing stopped")

    def _deliver(self, fix: LocationFix) -> None:
        try:
            self._on_fix(fix)
        except Exception as e:  # noqa: BLE001
            logger.exception("location callback failed: %s", e)
