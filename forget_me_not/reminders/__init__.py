"""地点提醒：模型、仓库、到达判定与地理围栏。"""
from forget_me_not.reminders.geofencing import GeofencingSession, SessionState
from forget_me_not.reminders.locations import LocationGroup, group_by_location
from forget_me_not.reminders.models import Location, Reminder
from forget_me_not.reminders.proximity import EvaluationResult, ProximityEvaluator
from forget_me_not.reminders.repository import ReminderRepository, validate_location
from forget_me_not.reminders.service import ReminderService

__all__ = [
    "EvaluationResult",
    "GeofencingSession",
    "Location",
    "LocationGroup",
    "ProximityEvaluator",
    "Reminder",
    "ReminderRepository",
    "ReminderService",
    "SessionState",
    "group_by_location",
    "validate_location",
]
