"""异常类型。

只有输入校验错误会抛给调用方；其余都在边界处被捕获并记录日志，
不会中断一次批量操作。
"""


class ForgetMeNotError(Exception):
    """所有业务异常的基类。"""


class InvalidInput(ForgetMeNotError, ValueError):
    """输入不合法，在任何修改发生之前抛出。"""


class ReminderValidationError(InvalidInput):
    """提醒文字为空、地点名称为空或半径越界。"""


class TodoValidationError(InvalidInput):
    """待办文字为空。"""


class PersistenceFailure(ForgetMeNotError):
    """持久化写入失败；内存状态仍然有效，下次成功写入时自动对齐。"""


class StoredDataError(ForgetMeNotError):
    """已存储的数据无法解析为记录列表。"""


class PermissionDenied(ForgetMeNotError):
    """定位或通知权限被拒绝；地理围栏保持未启动。"""


class LocationUnavailable(ForgetMeNotError):
    """宿主没有可用的定位源。"""


class DispatchFailure(ForgetMeNotError):
    """通知发送失败；该提醒本轮不记触发，下一轮仍可重试。"""

    def __init__(self, reminder_id: str, reason: str = ""):
        self.reminder_id = reminder_id
        self.reason = reason
        super().__init__(f"dispatch failed for reminder {reminder_id}: {reason}")
