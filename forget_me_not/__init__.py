"""Forget Me Not：到达地点时提醒的待办（地理围栏提醒）与按日期的待办清单。"""

__version__ = "1.0.0"
