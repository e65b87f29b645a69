"""待办数据模型。"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from forget_me_not.time_utils import ensure_utc


class HistoryPeriod(str, Enum):
    """已完成待办的时间筛选。"""
    ALL = "all"
    TODAY = "today"
    WEEK = "week"    # 今天零点往前 7 天
    MONTH = "month"  # 今天零点往前 30 天


class Todo(BaseModel):
    """单条待办。"""
    id: str = Field(..., min_length=1, description="唯一 ID")
    text: str = Field(..., min_length=1, description="待办内容")
    completed: bool = Field(..., description="是否已完成")
    created_at: datetime = Field(..., alias="createdAt")
    completed_at: Optional[datetime] = Field(..., alias="completedAt")
    due_date: Optional[datetime] = Field(None, alias="dueDate", description="截止时间")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at", "completed_at", "due_date")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    @model_validator(mode="after")
    def _completion_consistent(self) -> "Todo":
        if self.completed != (self.completed_at is not None):
            raise ValueError("completed and completedAt disagree")
        return self


@dataclass
class DayMarkers:
    """日历上某一天的标记。"""
    due_open: int = 0
    due_done: int = 0
    created: bool = False
