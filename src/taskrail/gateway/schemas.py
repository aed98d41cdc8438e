"""HTTP 请求 / 响应模型 -- JSON 字段统一使用 camelCase

请求模型的字段都有默认值：缺失字段交给 TaskService 做业务校验，
以得到统一的错误信息（例如 "Title is required."），而不是 schema 错误。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================
# 请求
# ============================================================


class CreateTaskRequest(_CamelModel):
    """POST /api/tasks"""

    task_type: str = Field(default="", alias="taskType")
    title: str = Field(default="")
    assigned_user_id: int = Field(default=0, alias="assignedUserId")


class ChangeStatusRequest(_CamelModel):
    """PUT /api/tasks/{task_id}/status"""

    target_status: int = Field(default=0, alias="targetStatus")
    assigned_user_id: int = Field(default=0, alias="assignedUserId")
    custom_data: dict[str, Any] | None = Field(default=None, alias="customData")


# ============================================================
# 响应
# ============================================================


class StatusHistoryView(_CamelModel):
    """流转历史条目"""

    from_status: int = Field(alias="fromStatus")
    to_status: int = Field(alias="toStatus")
    assigned_user_id: int = Field(alias="assignedUserId")
    assigned_user_name: str = Field(alias="assignedUserName")
    changed_at: datetime = Field(alias="changedAt")


class TaskView(_CamelModel):
    """任务详情视图"""

    id: str
    task_type: str = Field(alias="taskType")
    title: str
    current_status: int = Field(alias="currentStatus")
    current_status_label: str = Field(alias="currentStatusLabel")
    is_closed: bool = Field(alias="isClosed")
    assigned_user_id: int = Field(alias="assignedUserId")
    assigned_user_name: str = Field(alias="assignedUserName")
    custom_data: dict[str, Any] = Field(default_factory=dict, alias="customData")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    status_history: list[StatusHistoryView] = Field(
        default_factory=list,
        alias="statusHistory",
        description="按 changedAt 正序",
    )


class UserView(_CamelModel):
    id: int
    name: str
    email: str


class StatusDefinitionView(_CamelModel):
    status: int
    label: str


class FieldDefinitionView(_CamelModel):
    field_name: str = Field(alias="fieldName")
    label: str
    field_type: str = Field(alias="fieldType")
    required: bool
    array_length: int | None = Field(default=None, alias="arrayLength")


class TaskTypeView(_CamelModel):
    """任务类型目录条目"""

    task_type: str = Field(alias="taskType")
    max_status: int = Field(alias="maxStatus")
    statuses: list[StatusDefinitionView]
    fields_by_status: dict[int, list[FieldDefinitionView]] = Field(alias="fieldsByStatus")


def dump(model: BaseModel | list[BaseModel]) -> Any:
    """序列化为 camelCase JSON 兼容结构"""
    if isinstance(model, list):
        return [m.model_dump(mode="json", by_alias=True) for m in model]
    return model.model_dump(mode="json", by_alias=True)
