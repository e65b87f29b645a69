"""后台持久化：单线程顺序写入，调用方不等待 I/O。"""
from concurrent.futures import Future, ThreadPoolExecutor, wait
import threading
from typing import List, Optional

from forget_me_not.errors import PersistenceFailure
from forget_me_not.logger_config import setup_logger
from forget_me_not.platform.interfaces import KeyValueStore

logger = setup_logger(__name__)


class SnapshotWriter:
    """把整份快照写到某个键下。写入失败只记日志，不回滚内存状态。"""

    def __init__(self, store: KeyValueStore, key: str):
        self._store = store
        self._key = key
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"persist-{key}")
        self._lock = threading.Lock()
        self._pending: List[Future] = []
        self._closed = False

    def submit(self, raw: bytes) -> None:
        """提交一次写入；按提交顺序执行。"""
        with self._lock:
            if self._closed:
                logger.warning("writer for %s is closed, snapshot dropped", self._key)
                return
            self._pending = [f for f in self._pending if not f.done()]
            self._pending.append(self._executor.submit(self._write, raw))

    def _write(self, raw: bytes) -> bool:
        try:
            if not self._store.set(self._key, raw):
                raise PersistenceFailure(f"store rejected write for key {self._key}")
        except PersistenceFailure as e:
            logger.error("%s", e)
            return False
        except Exception as e:  # noqa: BLE001
            logger.exception("unexpected error writing key %s: %s", self._key, e)
            return False
        return True

    def flush(self, timeout: Optional[float] = None) -> bool:
        """等待已提交的写入完成；全部成功返回 True。"""
        with self._lock:
            pending = list(self._pending)
        if not pending:
            return True
        done, not_done = wait(pending, timeout=timeout)
        return not not_done and all(f.result() for f in done)

    def close(self) -> None:
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=True)
