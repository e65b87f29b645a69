"""测试用的时钟、通知器与定位源。"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Set

import pytest

from forget_me_not.platform.interfaces import LocationCallback, LocationUpdateConfig, PermissionStatus
from forget_me_not.storage.kv import MemoryKeyValueStore


class FakeClock:
    """可手动前进的时钟。"""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingDispatcher:
    """记录发出的通知；fail_for 中的提醒 id 发送失败。"""

    def __init__(self, fail_for: Optional[Set[str]] = None, raise_for: Optional[Set[str]] = None):
        self.sent: List[Dict[str, Any]] = []
        self.fail_for = fail_for or set()
        self.raise_for = raise_for or set()

    def notify(self, title: str, body: str, payload: Mapping[str, Any]) -> bool:
        reminder_id = payload.get("reminderId")
        if reminder_id in self.raise_for:
            raise RuntimeError("notification service unavailable")
        if reminder_id in self.fail_for:
            return False
        self.sent.append({"title": title, "body": body, "payload": dict(payload)})
        return True


class FakeSubscription:
    def __init__(self) -> None:
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeLocationProvider:
    """记录 start_updates 调用，并可手动推送定位。"""

    def __init__(self) -> None:
        self.starts: List[LocationUpdateConfig] = []
        self.callback: Optional[LocationCallback] = None
        self.subscription = FakeSubscription()

    def start_updates(self, config: LocationUpdateConfig, callback: LocationCallback) -> FakeSubscription:
        self.starts.append(config)
        self.callback = callback
        return self.subscription


class StaticPermissionService:
    def __init__(self, foreground: bool = True, background: bool = True, notifications: bool = True):
        self.foreground = foreground
        self.background = background
        self.notifications = notifications
        self.background_requested = False

    def request_foreground_location(self) -> PermissionStatus:
        return PermissionStatus.GRANTED if self.foreground else PermissionStatus.DENIED

    def request_background_location(self) -> PermissionStatus:
        self.background_requested = True
        return PermissionStatus.GRANTED if self.background else PermissionStatus.DENIED

    def request_notifications(self) -> PermissionStatus:
        return PermissionStatus.GRANTED if self.notifications else PermissionStatus.DENIED


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()
