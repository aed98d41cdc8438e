"""任务类型策略

每个任务类型是一个不可变的 TaskTypeStrategy 实例：声明状态序列、
每个前进目标状态需要的字段，并据此校验提交的数据。
类型之间的差异完全由数据描述，流转引擎不需要针对类型分支。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config import INITIAL_STATUS, TASK_TYPE_MAX_LENGTH
from ..models.task_type import FieldDefinition, StatusDefinition

UNKNOWN_STATUS_LABEL = "Unknown"


def validate_required_value(
    data: dict[str, Any],
    field: FieldDefinition,
    errors: list[str],
) -> None:
    """校验单个必填字段，错误追加到 errors

    - 缺失或为 null：“<Label> is required.”
    - 转为字符串后为空白：“<Label> cannot be empty.”
    """
    value = data.get(field.field_name)
    if value is None:
        errors.append(f"{field.label} is required.")
        return
    if not str(value).strip():
        errors.append(f"{field.label} cannot be empty.")


class TaskTypeStrategy(BaseModel):
    """任务类型策略

    Attributes:
        task_type: 类型名称，注册表中大小写不敏感
        statuses: 有序状态定义，编号必须恰好为 1..n
        fields_by_status: 前进目标状态 -> 字段定义列表
    """

    model_config = ConfigDict(frozen=True)

    task_type: str = Field(min_length=1, max_length=TASK_TYPE_MAX_LENGTH)
    statuses: tuple[StatusDefinition, ...] = Field(min_length=1)
    fields_by_status: dict[int, tuple[FieldDefinition, ...]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_definitions(self) -> "TaskTypeStrategy":
        numbers = [s.status for s in self.statuses]
        expected = list(range(INITIAL_STATUS, len(numbers) + 1))
        if numbers != expected:
            raise ValueError(
                f"statuses of '{self.task_type}' must be numbered {expected}, got {numbers}"
            )
        for status in self.fields_by_status:
            if status == INITIAL_STATUS or status not in numbers:
                raise ValueError(
                    f"fields of '{self.task_type}' declared for invalid target status {status}"
                )
        return self

    @property
    def max_status(self) -> int:
        """最终状态（关闭前的最后一个状态）"""
        return len(self.statuses)

    def status_definitions(self) -> list[StatusDefinition]:
        return list(self.statuses)

    def status_label(self, status: int) -> str:
        for definition in self.statuses:
            if definition.status == status:
                return definition.label
        return UNKNOWN_STATUS_LABEL

    def required_fields(self, target_status: int) -> list[FieldDefinition]:
        """前进进入 target_status 时需要提交的字段；无要求时返回空列表"""
        return list(self.fields_by_status.get(target_status, ()))

    def validate_data(self, target_status: int, submitted_data: dict[str, Any]) -> list[str]:
        """校验前进进入 target_status 时提交的数据

        Returns:
            错误信息列表，空列表表示校验通过
        """
        errors: list[str] = []
        for field in self.required_fields(target_status):
            if field.required:
                validate_required_value(submitted_data, field, errors)
        return errors
