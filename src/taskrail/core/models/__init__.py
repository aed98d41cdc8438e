"""TaskRail Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import FieldType, TransitionDirection
from .task import StatusChange, Task
from .task_type import FieldDefinition, StatusDefinition, TaskTypeInfo
from .user import User

__all__ = [
    # 枚举
    "FieldType",
    "TransitionDirection",
    # Task
    "Task",
    "StatusChange",
    # User
    "User",
    # 任务类型元数据
    "StatusDefinition",
    "FieldDefinition",
    "TaskTypeInfo",
]
