"""记录列表的 JSON 编解码。

存储格式是一个 JSON 数组，字段名与旧版应用写入的一致（camelCase）。
解码时只补齐已知的旧版缺省字段；缺少必填字段或违反约束的记录被拒收，
原样返回给调用方保存，不做静默兜底。
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from forget_me_not.errors import StoredDataError
from forget_me_not.logger_config import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass
class DecodeResult(Generic[T]):
    """解码结果：合法记录与被拒收的原始记录。"""
    records: List[T] = field(default_factory=list)
    rejected: List[Any] = field(default_factory=list)


def encode_records(records: Iterable[BaseModel]) -> bytes:
    data = [r.model_dump(mode="json", by_alias=True) for r in records]
    return json.dumps(data, ensure_ascii=False).encode("utf-8")


def decode_records(
    raw: bytes,
    model: Type[T],
    legacy_defaults: Optional[Mapping[str, Any]] = None,
) -> DecodeResult[T]:
    """解析存储内容。整体不是 JSON 数组时抛 StoredDataError。"""
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StoredDataError(f"stored {model.__name__} list is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise StoredDataError(f"stored {model.__name__} list is a {type(data).__name__}, expected array")

    result: DecodeResult[T] = DecodeResult()
    seen_ids = set()
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("rejected %s #%d: not an object", model.__name__, index)
            result.rejected.append(item)
            continue
        try:
            record = model.model_validate(_migrate(item, legacy_defaults))
        except ValidationError as e:
            logger.warning(
                "rejected %s #%d (id=%s): %d validation error(s): %s",
                model.__name__, index, item.get("id"), e.error_count(), e.errors()[0]["msg"],
            )
            result.rejected.append(item)
            continue
        record_id = getattr(record, "id", None)
        if record_id in seen_ids:
            logger.warning("rejected %s #%d: duplicate id %s", model.__name__, index, record_id)
            result.rejected.append(item)
            continue
        seen_ids.add(record_id)
        result.records.append(record)
    return result


def _migrate(item: Dict[str, Any], legacy_defaults: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if not legacy_defaults:
        return item
    migrated = dict(item)
    for key, value in legacy_defaults.items():
        migrated.setdefault(key, value)
    return migrated
