"""任务类型元数据模型

StatusDefinition / FieldDefinition 由各任务类型策略声明，
TaskTypeInfo 是任务类型目录对外暴露的汇总视图。
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import FieldType


class StatusDefinition(BaseModel):
    """状态定义：状态编号 + 显示标签"""

    model_config = ConfigDict(frozen=True)

    status: int = Field(ge=1, description="状态编号")
    label: str = Field(description="状态标签")


class FieldDefinition(BaseModel):
    """前进流转进入某状态时需要提交的字段"""

    model_config = ConfigDict(frozen=True)

    field_name: str = Field(description="customData 中的键名")
    label: str = Field(description="字段显示名称，同时用于错误信息")
    field_type: FieldType = Field(default=FieldType.STRING, description="字段类型标签")
    required: bool = Field(default=True, description="是否必填")
    array_length: int | None = Field(
        default=None,
        ge=1,
        description="数组类字段的期望长度提示",
    )


class TaskTypeInfo(BaseModel):
    """任务类型目录条目"""

    task_type: str
    max_status: int
    statuses: list[StatusDefinition] = Field(default_factory=list)
    fields_by_status: dict[int, list[FieldDefinition]] = Field(
        default_factory=dict,
        description="仅包含至少有一个必填字段的目标状态",
    )
