"""Store Protocol 接口定义

定义 TaskStore、StatusChangeStore、UserStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from collections.abc import Iterable
from typing import Protocol

from ..models.task import StatusChange, Task
from ..models.user import User


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(self, task: Task) -> None:
        """创建任务记录"""
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        ...

    async def list_tasks_for_user(self, user_id: int) -> list[Task]:
        """查询指定负责人的任务，按 updated_at 倒序"""
        ...

    async def update_task(self, task: Task) -> None:
        """覆盖任务可变字段"""
        ...

    async def count_tasks(self) -> int:
        ...


class StatusChangeStore(Protocol):
    """StatusChange 存储接口

    append-only：只允许插入，不允许更新或删除。
    """

    async def append_status_change(self, change: StatusChange) -> None:
        """追加流转记录"""
        ...

    async def get_history_for_task(self, task_id: str) -> list[StatusChange]:
        """查询指定任务的流转历史，按 changed_at 正序"""
        ...


class UserStore(Protocol):
    """User 存储接口"""

    async def get_user(self, user_id: int) -> User | None:
        ...

    async def list_users(self) -> list[User]:
        ...

    async def get_users_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        ...

    async def upsert_users(self, users: Iterable[User]) -> None:
        ...
