"""全局配置与路径。"""
from pathlib import Path

# 项目根目录（forget_me_not 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：提醒、待办等键值存储
DATA_DIR = ROOT_DIR / "data"
STORE_DIR = DATA_DIR / "store"
LOG_DIR = DATA_DIR / "logs"

# 存储键（与旧版数据保持一致）
REMINDERS_KEY = "reminders"
REJECTED_REMINDERS_KEY = "reminders.rejected"
TODOS_KEY = "todos"

# 提醒地点半径（米）
DEFAULT_RADIUS_M = 200
MIN_RADIUS_M = 50
MAX_RADIUS_M = 1000

# 同一提醒两次触发之间的最短间隔（分钟）
TRIGGER_COOLDOWN_MINUTES = 15

# 后台定位频率：每 30 秒或移动 50 米（先到为准）
LOCATION_ACCURACY = "balanced"
LOCATION_MIN_INTERVAL_MS = 30_000
LOCATION_MIN_DISTANCE_M = 50
# 桌面定位源的上报间隔，再按上面的节奏节流
LOCATION_POLL_INTERVAL_MS = 5_000
# 托盘常驻时允许后台定位
BACKGROUND_LOCATION_ENABLED = True

# 通知
NOTIFICATION_TITLE = "Forget Me Not!"
NOTIFICATION_DURATION_MS = 10_000

# 日志
LOG_FILE = "forget_me_not.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, STORE_DIR, LOG_DIR):
        d.mkdir(parents=True, exist_ok=True)
