"""TaskTypeCatalog -- 从注册表派生任务类型元数据，供客户端生成表单"""

from .models.task_type import TaskTypeInfo
from .registry import StrategyRegistry


class TaskTypeCatalog:
    """任务类型目录"""

    def __init__(self, registry: StrategyRegistry) -> None:
        self._registry = registry

    def list_all(self) -> list[TaskTypeInfo]:
        """列出所有已注册任务类型

        fields_by_status 只包含至少有一个字段要求的目标状态，
        无要求的状态直接省略而不是给出空列表。
        """
        result: list[TaskTypeInfo] = []
        for strategy in self._registry:
            fields_by_status = {}
            for definition in strategy.status_definitions():
                fields = strategy.required_fields(definition.status)
                if fields:
                    fields_by_status[definition.status] = fields
            result.append(
                TaskTypeInfo(
                    task_type=strategy.task_type,
                    max_status=strategy.max_status,
                    statuses=strategy.status_definitions(),
                    fields_by_status=fields_by_status,
                )
            )
        return result
