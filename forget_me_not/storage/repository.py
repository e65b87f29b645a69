"""内存中的记录列表 + 整份持久化。

所有修改在同一把锁内完成并提交快照写入；读取返回锁内拷贝的快照，
调用方拿到的对象与内部状态互不影响。
"""
import json
import threading
import uuid
from typing import Any, Callable, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from forget_me_not.errors import StoredDataError
from forget_me_not.logger_config import setup_logger
from forget_me_not.platform.interfaces import KeyValueStore
from forget_me_not.storage.codec import decode_records, encode_records
from forget_me_not.storage.writer import SnapshotWriter
from forget_me_not.time_utils import Clock, utc_now

logger = setup_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def _fingerprint(item: Any) -> str:
    return json.dumps(item, sort_keys=True, ensure_ascii=False)


class RecordListRepository(Generic[T]):
    """带 id / completed / completed_at 字段的记录列表，新记录排在最前。"""
    model: ClassVar[Type[BaseModel]]
    legacy_defaults: ClassVar[Dict[str, Any]] = {}

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        rejected_key: Optional[str] = None,
        clock: Clock = utc_now,
    ):
        self._store = store
        self._key = key
        self._rejected_key = rejected_key or f"{key}.rejected"
        self._clock = clock
        self._lock = threading.Lock()
        self._records: List[T] = []
        self._writer = SnapshotWriter(store, key)

    def load(self) -> int:
        """启动时读取已存储的列表，返回加载条数。读取失败时以空列表启动。"""
        try:
            raw = self._store.get(self._key)
        except OSError as e:
            logger.error("could not read %s: %s", self._key, e)
            return 0
        if raw is None:
            return 0
        try:
            result = decode_records(raw, self.model, self.legacy_defaults)
        except StoredDataError as e:
            logger.error("%s; starting with an empty list", e)
            self._keep_rejected([raw.decode("utf-8", errors="replace")])
            return 0
        if result.rejected:
            self._keep_rejected(result.rejected)
        with self._lock:
            self._records = list(result.records)
        logger.info("loaded %d %s record(s), rejected %d", len(result.records), self._key, len(result.rejected))
        return len(result.records)

    def _keep_rejected(self, rejected: List[Any]) -> None:
        """被拒收的原始记录追加到单独的键下，避免下次整份写入时丢失。

        已保存过的记录不再重复追加：坏数据在主键下修复前，每次启动都会再被拒收一次。
        """
        existing: List[Any] = []
        try:
            raw = self._store.get(self._rejected_key)
            if raw:
                loaded = json.loads(raw.decode("utf-8"))
                if isinstance(loaded, list):
                    existing = loaded
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("could not read %s, overwriting: %s", self._rejected_key, e)
        seen = {_fingerprint(item) for item in existing}
        added: List[Any] = []
        for item in rejected:
            key = _fingerprint(item)
            if key not in seen:
                seen.add(key)
                added.append(item)
        if not added:
            return
        payload = json.dumps(existing + added, ensure_ascii=False).encode("utf-8")
        if not self._store.set(self._rejected_key, payload):
            logger.error("could not keep %d rejected record(s) under %s", len(rejected), self._rejected_key)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """等待后台写入完成。"""
        return self._writer.flush(timeout)

    def close(self) -> None:
        self._writer.close()

    def get(self, record_id: str) -> Optional[T]:
        with self._lock:
            record = self._find_locked(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def list_all(self) -> List[T]:
        return self._select()

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def delete(self, record_id: str) -> bool:
        """删除记录；id 不存在时不做任何事，返回 False。"""
        with self._lock:
            remaining = [r for r in self._records if r.id != record_id]
            if len(remaining) == len(self._records):
                logger.info("delete ignored, %s id not found: %s", self._key, record_id)
                return False
            self._records = remaining
            self._persist_locked()
        return True

    def _toggle(self, record_id: str) -> Optional[T]:
        with self._lock:
            record = self._find_locked(record_id)
            if record is None:
                logger.info("toggle ignored, %s id not found: %s", self._key, record_id)
                return None
            record.completed = not record.completed
            record.completed_at = self._clock() if record.completed else None
            self._persist_locked()
            return record.model_copy(deep=True)

    def _prepend(self, build: Callable[[str], T]) -> T:
        with self._lock:
            record = build(self._new_id_locked())
            self._records.insert(0, record)
            self._persist_locked()
            return record.model_copy(deep=True)

    def _select(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._records if predicate is None or predicate(r)]

    def _find_locked(self, record_id: str) -> Optional[T]:
        for r in self._records:
            if r.id == record_id:
                return r
        return None

    def _new_id_locked(self) -> str:
        ids = {r.id for r in self._records}
        new_id = uuid.uuid4().hex
        while new_id in ids:
            new_id = uuid.uuid4().hex
        return new_id

    def _persist_locked(self) -> None:
        self._writer.submit(encode_records(self._records))
