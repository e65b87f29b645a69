"""到达判定：当前位置落在提醒半径内、且已过冷却时间的提醒发出通知。

每一轮基于开始时取到的活动提醒快照进行；多轮之间用锁串行，
避免重叠的定位回调对同一提醒重复触发。通知发出与触发记账之间没有事务，
进程若在两者之间退出，下一轮可能再次通知（至少一次投递）。
"""
import threading
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from forget_me_not.config import NOTIFICATION_TITLE, TRIGGER_COOLDOWN_MINUTES
from forget_me_not.errors import DispatchFailure
from forget_me_not.geo import distance
from forget_me_not.logger_config import setup_logger
from forget_me_not.platform.interfaces import LocationFix, NotificationDispatcher
from forget_me_not.reminders.models import Reminder
from forget_me_not.reminders.repository import ReminderRepository
from forget_me_not.time_utils import Clock, utc_now

logger = setup_logger(__name__)


@dataclass
class EvaluationResult:
    """单轮判定结果（提醒 id 列表）。"""
    candidates: List[str] = field(default_factory=list)    # 在半径内
    cooling_down: List[str] = field(default_factory=list)  # 在半径内但仍在冷却
    fired: List[str] = field(default_factory=list)         # 已发出通知并记账
    failed: List[str] = field(default_factory=list)        # 通知发送失败，下一轮重试


class ProximityEvaluator:
    """按当前位置检查活动提醒并发出通知。"""

    def __init__(
        self,
        repository: ReminderRepository,
        dispatcher: NotificationDispatcher,
        clock: Clock = utc_now,
        cooldown: Optional[timedelta] = None,
        title: str = NOTIFICATION_TITLE,
    ):
        self._repository = repository
        self._dispatcher = dispatcher
        self._clock = clock
        self._cooldown = cooldown if cooldown is not None else timedelta(minutes=TRIGGER_COOLDOWN_MINUTES)
        self._title = title
        self._lock = threading.Lock()

    @property
    def cooldown(self) -> timedelta:
        return self._cooldown

    def evaluate_fix(self, fix: LocationFix) -> EvaluationResult:
        return self.evaluate(fix.latitude, fix.longitude)

    def evaluate(self, latitude: float, longitude: float) -> EvaluationResult:
        """执行一轮判定。任何异常都只记日志，不向调用方抛出。"""
        result = EvaluationResult()
        with self._lock:
            try:
                self._run_pass(latitude, longitude, result)
            except Exception as e:  # noqa: BLE001
                logger.exception("proximity pass at (%.6f, %.6f) failed: %s", latitude, longitude, e)
        return result

    def _run_pass(self, latitude: float, longitude: float, result: EvaluationResult) -> None:
        now = self._clock()
        for reminder in self._repository.list_active():
            loc = reminder.location
            d = distance(latitude, longitude, loc.latitude, loc.longitude)
            if d > loc.radius:
                continue
            result.candidates.append(reminder.id)
            if not reminder.cooldown_elapsed(now, self._cooldown):
                result.cooling_down.append(reminder.id)
                continue
            try:
                self._dispatch(reminder)
            except DispatchFailure as e:
                logger.warning("%s", e)
                result.failed.append(reminder.id)
                continue
            logger.info("reminder %s fired at %.0fm from %s", reminder.id, d, loc.name)
            result.fired.append(reminder.id)

        if result.fired:
            self._repository.record_trigger(result.fired)

    def _dispatch(self, reminder: Reminder) -> None:
        try:
            sent = self._dispatcher.notify(
                self._title,
                reminder.notification_body(),
                {"reminderId": reminder.id},
            )
        except Exception as e:  # noqa: BLE001
            raise DispatchFailure(reminder.id, str(e)) from e
        if not sent:
            raise DispatchFailure(reminder.id, "dispatcher rejected the notification")
