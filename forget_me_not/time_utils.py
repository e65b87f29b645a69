"""时间工具：统一使用带时区的 UTC 时间。"""
from datetime import date, datetime, time, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """当前 UTC 时间（带时区）。"""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """无时区的时间按 UTC 处理，有时区的转换为 UTC。"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_day(value: datetime) -> date:
    """时间在本地时区下的日期。"""
    return value.astimezone().date()


def local_midnight(value: datetime) -> datetime:
    """时间所在本地日期的零点（带本地时区）。"""
    local = value.astimezone()
    return datetime.combine(local.date(), time.min, tzinfo=local.tzinfo)
