"""日志配置：滚动文件 + 控制台，挂在包级 logger 上，各模块 logger 向上传递。"""
import logging
from logging.handlers import RotatingFileHandler

from forget_me_not.config import LOG_BACKUP_COUNT, LOG_DIR, LOG_FILE, LOG_MAX_BYTES, ensure_dirs

PACKAGE_LOGGER = "forget_me_not"

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configure_package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)

    # 避免重复添加 handler
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    try:
        ensure_dirs()
        file_handler = RotatingFileHandler(
            LOG_DIR / LOG_FILE,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        # 数据目录不可写时只输出到控制台
        logging.getLogger(__name__).warning("file logging disabled: %s", e)
    else:
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def setup_logger(name: str) -> logging.Logger:
    """获取模块 logger（一般传 __name__）。

    Args:
        name: logger 名称

    Returns:
        logger；forget_me_not 包内的名称共用包级 handler
    """
    _configure_package_logger()
    return logging.getLogger(name)


def configure_root_logger() -> None:
    """降低第三方库日志噪音。"""
    logging.getLogger("PyQt6").setLevel(logging.WARNING)
