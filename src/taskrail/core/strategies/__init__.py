"""任务类型策略 -- 新增任务类型只需定义策略实例并加入注册列表

DEFAULT_STRATEGIES 在进程入口处传给 StrategyRegistry。
"""

from .base import UNKNOWN_STATUS_LABEL, TaskTypeStrategy, validate_required_value
from .development import DEVELOPMENT
from .procurement import PROCUREMENT

DEFAULT_STRATEGIES: tuple[TaskTypeStrategy, ...] = (PROCUREMENT, DEVELOPMENT)

__all__ = [
    "TaskTypeStrategy",
    "validate_required_value",
    "UNKNOWN_STATUS_LABEL",
    "PROCUREMENT",
    "DEVELOPMENT",
    "DEFAULT_STRATEGIES",
]
