"""StrategyRegistry -- 任务类型名 -> 策略

进程启动时用全部策略显式构建一次，之后只读；
不存在运行时的全局查找。
"""

from collections.abc import Iterable, Iterator

from .exceptions import UnknownTaskTypeError
from .strategies import DEFAULT_STRATEGIES, TaskTypeStrategy


class StrategyRegistry:
    """任务类型策略注册表（名称大小写不敏感）"""

    def __init__(self, strategies: Iterable[TaskTypeStrategy]) -> None:
        self._strategies: dict[str, TaskTypeStrategy] = {}
        for strategy in strategies:
            key = strategy.task_type.casefold()
            if key in self._strategies:
                raise ValueError(f"Duplicate task type registration: '{strategy.task_type}'")
            self._strategies[key] = strategy

    def resolve(self, task_type: str) -> TaskTypeStrategy:
        """根据类型名查找策略

        Raises:
            UnknownTaskTypeError: 类型未注册（校验失败，非 NotFound）
        """
        strategy = self._strategies.get(task_type.casefold())
        if strategy is None:
            raise UnknownTaskTypeError(task_type)
        return strategy

    def __iter__(self) -> Iterator[TaskTypeStrategy]:
        return iter(self._strategies.values())

    def __len__(self) -> int:
        return len(self._strategies)

    @property
    def task_types(self) -> list[str]:
        return [s.task_type for s in self._strategies.values()]


def build_default_registry() -> StrategyRegistry:
    """使用内置任务类型构建注册表"""
    return StrategyRegistry(DEFAULT_STRATEGIES)
