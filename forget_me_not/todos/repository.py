"""待办仓库：与提醒仓库同样的锁与整份持久化方式，存储键为 todos。"""
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Union

from forget_me_not.config import TODOS_KEY
from forget_me_not.errors import TodoValidationError
from forget_me_not.logger_config import setup_logger
from forget_me_not.platform.interfaces import KeyValueStore
from forget_me_not.storage.repository import RecordListRepository
from forget_me_not.time_utils import Clock, ensure_utc, local_day, local_midnight, utc_now
from forget_me_not.todos.models import DayMarkers, HistoryPeriod, Todo

logger = setup_logger(__name__)

_PERIOD_DAYS = {HistoryPeriod.TODAY: 0, HistoryPeriod.WEEK: 7, HistoryPeriod.MONTH: 30}


def _to_due_datetime(value: Union[date, datetime]) -> datetime:
    # 只给日期时取本地零点
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.combine(value, time.min).astimezone())


class TodoRepository(RecordListRepository[Todo]):
    """待办的增删改查与按日期查询。"""
    model = Todo

    def __init__(self, store: KeyValueStore, key: str = TODOS_KEY, clock: Clock = utc_now):
        super().__init__(store, key, clock=clock)

    def add(self, text: str, due_date: Optional[Union[date, datetime]] = None) -> Todo:
        text = (text or "").strip()
        if not text:
            raise TodoValidationError("todo text must not be empty")
        due = _to_due_datetime(due_date) if due_date is not None else None
        now = self._clock()
        todo = self._prepend(
            lambda todo_id: Todo(
                id=todo_id,
                text=text,
                completed=False,
                created_at=now,
                completed_at=None,
                due_date=due,
            )
        )
        logger.info("todo created: id=%s due=%s", todo.id, due.isoformat() if due else None)
        return todo

    def toggle(self, todo_id: str) -> Optional[Todo]:
        return self._toggle(todo_id)

    def list_active(self) -> List[Todo]:
        return self._select(lambda t: not t.completed)

    def list_completed(self) -> List[Todo]:
        return self._select(lambda t: t.completed)

    def list_for_date(self, day: date) -> List[Todo]:
        """当天（本地日期）创建或到期的待办。"""
        return self._select(
            lambda t: local_day(t.created_at) == day
            or (t.due_date is not None and local_day(t.due_date) == day)
        )

    def completed_within(self, period: HistoryPeriod = HistoryPeriod.ALL) -> List[Todo]:
        period = HistoryPeriod(period)
        if period == HistoryPeriod.ALL:
            return self.list_completed()
        since = local_midnight(self._clock()) - timedelta(days=_PERIOD_DAYS[period])
        return self._select(lambda t: t.completed and t.completed_at >= since)

    def clear_completed(self) -> int:
        """删除全部已完成的待办，返回删除条数。"""
        with self._lock:
            remaining = [t for t in self._records if not t.completed]
            removed = len(self._records) - len(remaining)
            if removed:
                self._records = remaining
                self._persist_locked()
        return removed

    def marked_dates(self) -> Dict[date, DayMarkers]:
        """日历标记：到期日按完成与否计数，创建日打标记。"""
        marks: Dict[date, DayMarkers] = {}
        for t in self.list_all():
            if t.due_date is not None:
                m = marks.setdefault(local_day(t.due_date), DayMarkers())
                if t.completed:
                    m.due_done += 1
                else:
                    m.due_open += 1
            marks.setdefault(local_day(t.created_at), DayMarkers()).created = True
        return marks
