"""键值存储与记录列表的持久化。"""
from forget_me_not.storage.codec import DecodeResult, decode_records, encode_records
from forget_me_not.storage.kv import JsonFileKeyValueStore, MemoryKeyValueStore
from forget_me_not.storage.repository import RecordListRepository
from forget_me_not.storage.writer import SnapshotWriter

__all__ = [
    "DecodeResult",
    "decode_records",
    "encode_records",
    "JsonFileKeyValueStore",
    "MemoryKeyValueStore",
    "RecordListRepository",
    "SnapshotWriter",
]
