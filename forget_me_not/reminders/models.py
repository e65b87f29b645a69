"""地点提醒数据模型（字段名与存储格式一致）。"""
from datetime import datetime, timedelta
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from forget_me_not.config import DEFAULT_RADIUS_M
from forget_me_not.time_utils import ensure_utc


class Location(BaseModel):
    """提醒绑定的地点，创建后不再修改。"""
    name: str = Field(..., min_length=1, description="地点名称，如 CVS Pharmacy")
    address: str = Field("", description="地址，可为空")
    latitude: float = Field(..., ge=-90, le=90, description="纬度（WGS-84）")
    longitude: float = Field(..., ge=-180, le=180, description="经度（WGS-84）")
    radius: int = Field(DEFAULT_RADIUS_M, gt=0, description="触发半径（米）")

    model_config = ConfigDict(frozen=True)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("address", mode="before")
    @classmethod
    def _empty_address(cls, value: Any) -> Any:
        return "" if value is None else value


class Reminder(BaseModel):
    """单条地点提醒。"""
    id: str = Field(..., min_length=1, description="唯一 ID，创建时生成")
    text: str = Field(..., min_length=1, description="提醒内容")
    location: Location
    completed: bool = Field(..., description="是否已完成")
    created_at: datetime = Field(..., alias="createdAt")
    completed_at: Optional[datetime] = Field(..., alias="completedAt")
    triggered_count: int = Field(..., ge=0, alias="triggeredCount", description="已触发通知次数")
    last_triggered_at: Optional[datetime] = Field(..., alias="lastTriggeredAt", description="最近一次触发时间")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at", "completed_at", "last_triggered_at")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    @model_validator(mode="after")
    def _completion_consistent(self) -> "Reminder":
        if self.completed != (self.completed_at is not None):
            raise ValueError("completed and completedAt disagree")
        return self

    def cooldown_elapsed(self, now: datetime, cooldown: timedelta) -> bool:
        """从未触发，或距上次触发已超过冷却时间。"""
        return self.last_triggered_at is None or now - self.last_triggered_at >= cooldown

    def notification_body(self) -> str:
        return f"{self.text} at {self.location.name}"
