"""按日期管理的待办清单。"""
from forget_me_not.todos.models import DayMarkers, HistoryPeriod, Todo
from forget_me_not.todos.repository import TodoRepository

__all__ = ["DayMarkers", "HistoryPeriod", "Todo", "TodoRepository"]
