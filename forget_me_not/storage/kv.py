"""键值存储实现：本地 JSON 文件与进程内字典。"""
import os
import threading
from pathlib import Path
from typing import Dict, Optional

from forget_me_not.config import STORE_DIR, ensure_dirs
from forget_me_not.logger_config import setup_logger

logger = setup_logger(__name__)


class JsonFileKeyValueStore:
    """每个键一个文件（<key>.json），整体覆盖写入。"""

    def __init__(self, base_dir: Optional[Path] = None):
        if base_dir is None:
            ensure_dirs()
        self.base_dir = base_dir or STORE_DIR
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "rb") as f:
            return f.read()

    def set(self, key: str, raw: bytes) -> bool:
        path = self._path(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            with open(tmp, "wb") as f:
                f.write(raw)
            os.replace(tmp, path)
        except OSError as e:
            logger.error("write failed for key %s: %s", key, e)
            return False
        return True


class MemoryKeyValueStore:
    """进程内存储，进程退出即丢失。"""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._lock = threading.Lock()
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, raw: bytes) -> bool:
        with self._lock:
            self._data[key] = bytes(raw)
        return True
