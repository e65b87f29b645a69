"""地点提醒服务：把仓库、判定器、地理围栏会话和权限组合起来，供界面层调用。"""
from typing import List, Optional

from forget_me_not.errors import PermissionDenied
from forget_me_not.logger_config import setup_logger
from forget_me_not.permissions import PermissionSnapshot
from forget_me_not.platform.interfaces import LocationFix
from forget_me_not.reminders.geofencing import GeofencingSession
from forget_me_not.reminders.locations import LocationGroup, group_by_location
from forget_me_not.reminders.models import Reminder
from forget_me_not.reminders.proximity import EvaluationResult, ProximityEvaluator
from forget_me_not.reminders.repository import LocationInput, ReminderRepository

logger = setup_logger(__name__)


class ReminderService:
    """新增提醒时确保地理围栏已启动；定位回调转给判定器。"""

    def __init__(
        self,
        repository: ReminderRepository,
        evaluator: ProximityEvaluator,
        session: GeofencingSession,
        permissions: Optional[PermissionSnapshot] = None,
    ):
        self.repository = repository
        self.evaluator = evaluator
        self.session = session
        self._permissions = permissions or PermissionSnapshot()

    @property
    def permissions(self) -> PermissionSnapshot:
        return self._permissions

    def update_permissions(self, snapshot: PermissionSnapshot) -> None:
        self._permissions = snapshot

    def add_reminder(self, text: str, location: LocationInput) -> Reminder:
        reminder = self.repository.create(text, location)
        self._ensure_monitoring()
        return reminder

    def toggle_reminder(self, reminder_id: str) -> Optional[Reminder]:
        return self.repository.toggle_completed(reminder_id)

    def delete_reminder(self, reminder_id: str) -> bool:
        return self.repository.delete(reminder_id)

    def active_reminders(self) -> List[Reminder]:
        return self.repository.list_active()

    def completed_reminders(self) -> List[Reminder]:
        return self.repository.list_completed()

    def reminders_by_location(self, location_name: str) -> List[Reminder]:
        return self.repository.list_by_location_name_contains(location_name)

    def location_groups(self) -> List[LocationGroup]:
        return group_by_location(self.repository.list_all())

    def resume_monitoring(self) -> bool:
        """启动时若已有未完成的提醒，恢复地理围栏。"""
        if self.repository.active_count() == 0:
            return False
        return self._ensure_monitoring()

    def check_proximity(self, latitude: float, longitude: float) -> EvaluationResult:
        return self.evaluator.evaluate(latitude, longitude)

    def on_location(self, fix: LocationFix) -> EvaluationResult:
        """地理围栏会话的定位回调。"""
        return self.evaluator.evaluate_fix(fix)

    def _ensure_monitoring(self) -> bool:
        try:
            self._permissions.require_monitoring()
        except PermissionDenied as e:
            logger.warning("reminders will not fire: %s", e)
            return self.session.ensure_started(False)
        return self.session.ensure_started(True)
