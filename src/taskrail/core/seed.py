"""种子数据 -- 固定用户 + 可选演示任务

用户在每次启动时幂等写入；演示任务只在 tasks 表为空时写入。
"""

from datetime import UTC, datetime

from ulid import ULID

from .config import INITIAL_STATUS
from .models.task import Task
from .models.user import User
from .registry import StrategyRegistry
from .store import StoreGroup
from .store.transaction import create_task

SEED_USERS: tuple[User, ...] = (
    User(user_id=1, name="Alice Johnson", email="alice@example.com"),
    User(user_id=2, name="Bob Smith", email="bob@example.com"),
    User(user_id=3, name="Charlie Brown", email="charlie@example.com"),
    User(user_id=4, name="Diana Prince", email="diana@example.com"),
)

# (task_type, title, assigned_user_id)
DEMO_TASKS: tuple[tuple[str, str, int], ...] = (
    ("Procurement", "Purchase office laptops", 1),
    ("Procurement", "Purchase monitors", 2),
    ("Procurement", "Purchase office furniture", 3),
    ("Development", "Build REST API", 1),
    ("Development", "Implement authentication", 2),
    ("Development", "Build dashboard", 4),
)


async def seed_users(store_group: StoreGroup) -> int:
    """写入固定用户，返回写入条数"""
    try:
        await store_group.user_store.upsert_users(SEED_USERS)
        await store_group.conn.commit()
    except Exception:
        await store_group.conn.rollback()
        raise
    return len(SEED_USERS)


async def seed_demo_tasks(store_group: StoreGroup, registry: StrategyRegistry) -> int:
    """tasks 表为空时写入演示任务

    Returns:
        实际写入的任务数（表非空时为 0）
    """
    if await store_group.task_store.count_tasks() > 0:
        return 0

    for task_type, title, user_id in DEMO_TASKS:
        strategy = registry.resolve(task_type)
        now = datetime.now(UTC)
        task = Task(
            task_id=str(ULID()),
            task_type=strategy.task_type,
            title=title,
            current_status=INITIAL_STATUS,
            assigned_user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        await create_task(store_group.conn, store_group.task_store, task)
    return len(DEMO_TASKS)
