"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / 注册表 / 服务实例

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Depends, Request
from taskrail.core.catalog import TaskTypeCatalog
from taskrail.core.registry import StrategyRegistry
from taskrail.core.store import StoreGroup

from .services.task_service import TaskService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_registry(request: Request) -> StrategyRegistry:
    """从 app.state 获取策略注册表"""
    return request.app.state.registry


def get_catalog(request: Request) -> TaskTypeCatalog:
    """从 app.state 获取任务类型目录"""
    return request.app.state.catalog


def get_task_service(
    store_group: StoreGroup = Depends(get_store_group),
    registry: StrategyRegistry = Depends(get_registry),
) -> TaskService:
    """按请求构建 TaskService（无状态，仅持有共享依赖）"""
    return TaskService(store_group, registry)
