"""进程级服务装配：启动时创建一次，退出时释放。

后台定位回调在装配时就绑定到这里创建的仓库、判定器与通知器，
不存在脱离应用状态的回调。
"""
from dataclasses import dataclass

from forget_me_not.logger_config import setup_logger
from forget_me_not.permissions import PermissionSnapshot, request_permissions
from forget_me_not.platform.interfaces import (
    KeyValueStore,
    LocationProvider,
    LocationUpdateConfig,
    NotificationDispatcher,
    PermissionService,
)
from forget_me_not.reminders.geofencing import GeofencingSession
from forget_me_not.reminders.proximity import ProximityEvaluator
from forget_me_not.reminders.repository import ReminderRepository
from forget_me_not.reminders.service import ReminderService
from forget_me_not.time_utils import Clock, utc_now
from forget_me_not.todos.repository import TodoRepository

logger = setup_logger(__name__)


@dataclass
class AppServices:
    """应用内共享的服务实例。"""
    reminders: ReminderService
    todos: TodoRepository

    def start(self, permission_service: PermissionService) -> PermissionSnapshot:
        """读取已存储数据、请求权限，有未完成提醒时恢复地理围栏。"""
        loaded_reminders = self.reminders.repository.load()
        loaded_todos = self.todos.load()
        logger.info("starting with %d reminder(s), %d todo(s)", loaded_reminders, loaded_todos)
        snapshot = request_permissions(permission_service)
        self.reminders.update_permissions(snapshot)
        self.reminders.resume_monitoring()
        return snapshot

    def shutdown(self) -> None:
        self.reminders.session.stop()
        self.reminders.repository.flush()
        self.reminders.repository.close()
        self.todos.flush()
        self.todos.close()
        logger.info("services shut down")


def build_services(
    store: KeyValueStore,
    location_provider: LocationProvider,
    dispatcher: NotificationDispatcher,
    clock: Clock = utc_now,
    location_config: LocationUpdateConfig = LocationUpdateConfig(),
) -> AppServices:
    repository = ReminderRepository(store, clock=clock)
    evaluator = ProximityEvaluator(repository, dispatcher, clock=clock)
    # 回调在会话启动后才会被调用，此时 service 已创建
    session = GeofencingSession(location_provider, lambda fix: service.on_location(fix), location_config)
    service = ReminderService(repository, evaluator, session)
    return AppServices(
        reminders=service,
        todos=TodoRepository(store, clock=clock),
    )
