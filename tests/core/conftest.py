"""核心层测试配置 -- Store 实例组 + 测试任务构造"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from taskrail.core.models import Task
from taskrail.core.registry import StrategyRegistry, build_default_registry
from taskrail.core.seed import seed_users
from taskrail.core.store import StoreGroup, create_store_group


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """已初始化并写入固定用户的 Store 实例组"""
    group = await create_store_group(str(tmp_db_path))
    await seed_users(group)
    yield group
    await group.conn.close()


@pytest.fixture
def registry() -> StrategyRegistry:
    return build_default_registry()


def make_task(
    task_type: str = "Procurement",
    current_status: int = 1,
    is_closed: bool = False,
    assigned_user_id: int = 1,
    custom_data: dict[str, Any] | None = None,
    task_id: str = "01JTEST0000000000000000001",
) -> Task:
    """构造测试用任务快照"""
    now = datetime.now(UTC)
    return Task(
        task_id=task_id,
        task_type=task_type,
        title="测试任务",
        current_status=current_status,
        is_closed=is_closed,
        assigned_user_id=assigned_user_id,
        custom_data=custom_data or {},
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def task_factory():
    """返回任务快照构造函数"""
    return make_task
