"""Task Domain Model

tasks 表保存任务当前快照，status_changes 表是其 append-only 流转历史。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ..config import INITIAL_STATUS


class Task(BaseModel):
    """Task 数据模型

    current_status 始终位于 [1, strategy.max_status]；
    is_closed 只能从 False 变为 True，关闭后除 updated_at 外不再变化。
    """

    task_id: str = Field(description="唯一标识，ULID 格式")
    task_type: str = Field(description="任务类型（注册策略的规范名称），创建后不可变")
    title: str = Field(description="任务标题")
    current_status: int = Field(default=INITIAL_STATUS, ge=1, description="当前状态")
    is_closed: bool = Field(default=False, description="是否已关闭")
    assigned_user_id: int = Field(description="当前负责人 ID")
    custom_data: dict[str, Any] = Field(
        default_factory=dict,
        description="类型相关的自定义数据，历次前进流转提交数据的并集",
    )
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")


class StatusChange(BaseModel):
    """StatusChange 数据模型 -- 流转历史记录

    append-only，创建后不可修改；随所属任务级联删除。
    """

    change_id: str = Field(description="唯一标识，ULID 格式")
    task_id: str = Field(description="所属任务 ID")
    from_status: int = Field(description="流转前状态")
    to_status: int = Field(description="流转后状态")
    assigned_user_id: int = Field(description="本次流转后的负责人 ID")
    changed_at: datetime = Field(description="流转时间")
