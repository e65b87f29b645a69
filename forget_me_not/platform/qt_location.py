"""基于 QtPositioning 的定位源。"""
from datetime import datetime, timezone
from typing import Optional

from PyQt6.QtCore import QObject
from PyQt6.QtPositioning import QGeoPositionInfo, QGeoPositionInfoSource

from forget_me_not.config import LOCATION_POLL_INTERVAL_MS
from forget_me_not.errors import LocationUnavailable
from forget_me_not.logger_config import setup_logger
from forget_me_not.platform.gate import UpdateGate
from forget_me_not.platform.interfaces import LocationCallback, LocationFix, LocationUpdateConfig

logger = setup_logger(__name__)

_METHODS = {
    "high": QGeoPositionInfoSource.PositioningMethod.SatellitePositioningMethods,
    "balanced": QGeoPositionInfoSource.PositioningMethod.AllPositioningMethods,
    "low": QGeoPositionInfoSource.PositioningMethod.NonSatellitePositioningMethods,
}


def fix_from_position(info: QGeoPositionInfo) -> Optional[LocationFix]:
    coord = info.coordinate()
    if not info.isValid() or not coord.isValid():
        return None
    stamp = info.timestamp()
    if stamp.isValid():
        ts = datetime.fromtimestamp(stamp.toSecsSinceEpoch(), tz=timezone.utc)
    else:
        ts = datetime.now(timezone.utc)
    return LocationFix(latitude=coord.latitude(), longitude=coord.longitude(), timestamp=ts)


class QtLocationSubscription:
    """停止时断开信号并停止定位源。"""

    def __init__(self, source: QGeoPositionInfoSource):
        self._source = source

    def stop(self) -> None:
        self._source.stopUpdates()
        self._source.positionUpdated.disconnect()
        self._source.deleteLater()


class QtLocationProvider:
    """定位源按较短间隔上报，再由 UpdateGate 按 时间/距离 节流后交给回调。"""

    def __init__(self, parent: Optional[QObject] = None, poll_interval_ms: int = LOCATION_POLL_INTERVAL_MS):
        self._parent = parent
        self._poll_interval_ms = poll_interval_ms

    def start_updates(self, config: LocationUpdateConfig, callback: LocationCallback) -> QtLocationSubscription:
        source = QGeoPositionInfoSource.createDefaultSource(self._parent)
        if source is None:
            raise LocationUnavailable("no positioning source available on this host")
        source.setPreferredPositioningMethods(_METHODS.get(config.accuracy, _METHODS["balanced"]))
        source.setUpdateInterval(max(source.minimumUpdateInterval(), min(self._poll_interval_ms, config.min_interval_ms)))
        gate = UpdateGate(config)

        def on_position(info: QGeoPositionInfo) -> None:
            fix = fix_from_position(info)
            if fix is not None and gate.accept(fix):
                callback(fix)

        def on_error(error: QGeoPositionInfoSource.Error) -> None:
            logger.warning("positioning error from %s: %s", source.sourceName(), error)

        source.positionUpdated.connect(on_position)
        source.errorOccurred.connect(on_error)
        source.startUpdates()
        logger.info("positioning source %s started", source.sourceName())
        return QtLocationSubscription(source)
