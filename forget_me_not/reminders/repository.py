"""地点提醒仓库：进程内唯一的提醒列表。

id 不存在时 toggle / delete 静默忽略（返回 None / False），列表保持不变。
"""
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from forget_me_not.config import (
    DEFAULT_RADIUS_M,
    MAX_RADIUS_M,
    MIN_RADIUS_M,
    REJECTED_REMINDERS_KEY,
    REMINDERS_KEY,
)
from forget_me_not.errors import ReminderValidationError
from forget_me_not.logger_config import setup_logger
from forget_me_not.platform.interfaces import KeyValueStore
from forget_me_not.reminders.models import Location, Reminder
from forget_me_not.storage.repository import RecordListRepository
from forget_me_not.time_utils import Clock, utc_now

logger = setup_logger(__name__)

LocationInput = Union[Location, Mapping[str, Any]]


def validate_location(location: LocationInput) -> Location:
    """把输入转换为 Location 并检查半径范围。"""
    if isinstance(location, Location):
        loc = location
    else:
        data = dict(location)
        if data.get("radius") is None:
            data["radius"] = DEFAULT_RADIUS_M
        try:
            loc = Location.model_validate(data)
        except ValidationError as e:
            raise ReminderValidationError(f"invalid location: {e.errors()[0]['msg']}") from e
    if not MIN_RADIUS_M <= loc.radius <= MAX_RADIUS_M:
        raise ReminderValidationError(
            f"radius must be between {MIN_RADIUS_M} and {MAX_RADIUS_M} meters, got {loc.radius}"
        )
    return loc


class ReminderRepository(RecordListRepository[Reminder]):
    """提醒的增删改查与触发记账。"""
    model = Reminder
    # 旧版数据没有 lastTriggeredAt
    legacy_defaults = {"lastTriggeredAt": None}

    def __init__(
        self,
        store: KeyValueStore,
        key: str = REMINDERS_KEY,
        rejected_key: str = REJECTED_REMINDERS_KEY,
        clock: Clock = utc_now,
    ):
        super().__init__(store, key, rejected_key=rejected_key, clock=clock)

    def create(self, text: str, location: LocationInput) -> Reminder:
        """新建提醒并放到列表最前。输入不合法时抛 ReminderValidationError，不做任何修改。"""
        text = (text or "").strip()
        if not text:
            raise ReminderValidationError("reminder text must not be empty")
        loc = validate_location(location)
        now = self._clock()

        def build(reminder_id: str) -> Reminder:
            return Reminder(
                id=reminder_id,
                text=text,
                location=loc,
                completed=False,
                created_at=now,
                completed_at=None,
                triggered_count=0,
                last_triggered_at=None,
            )

        reminder = self._prepend(build)
        logger.info("reminder created: id=%s at %s (r=%dm)", reminder.id, loc.name, loc.radius)
        return reminder

    def toggle_completed(self, reminder_id: str) -> Optional[Reminder]:
        """切换完成状态，同时设置/清空 completedAt。"""
        return self._toggle(reminder_id)

    def record_trigger(self, reminder_ids: Iterable[str]) -> int:
        """批量记录触发：计数加一并更新 lastTriggeredAt，一次写入。返回更新条数。"""
        ids = set(reminder_ids)
        if not ids:
            return 0
        with self._lock:
            now = self._clock()
            updated = 0
            for r in self._records:
                if r.id in ids:
                    r.triggered_count += 1
                    r.last_triggered_at = now
                    updated += 1
            if updated:
                self._persist_locked()
        return updated

    def list_active(self) -> List[Reminder]:
        return self._select(lambda r: not r.completed)

    def list_completed(self) -> List[Reminder]:
        return self._select(lambda r: r.completed)

    def list_by_location_name_contains(self, substring: str) -> List[Reminder]:
        """地点名称包含子串（不区分大小写）。"""
        needle = substring.casefold()
        return self._select(lambda r: needle in r.location.name.casefold())

    def active_count(self) -> int:
        with self._lock:
            return sum(1 for r in self._records if not r.completed)
