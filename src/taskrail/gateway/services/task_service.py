"""TaskService -- 任务创建/流转/关闭/查询业务逻辑

状态变更流程：
1. 校验请求参数（负责人必填）
2. 加载任务，解析任务类型策略，确认新负责人存在
3. 交给流转引擎评估（纯函数，不产生副作用）
4. 在同一事务内写入任务快照与流转记录

并发修改同一任务时后写覆盖先写，不做冲突检测。
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from taskrail.core.config import INITIAL_STATUS, TITLE_MAX_LENGTH
from taskrail.core.engine import evaluate_close, evaluate_transition
from taskrail.core.exceptions import (
    TaskNotFoundError,
    UserNotFoundError,
    ValidationFailedError,
)
from taskrail.core.models import StatusChange, Task, User
from taskrail.core.registry import StrategyRegistry
from taskrail.core.store import StoreGroup
from taskrail.core.store.transaction import (
    create_task,
    update_task_and_append_status_change,
    update_task_only,
)
from ulid import ULID

from ..schemas import TaskView, UserView
from .task_mapper import to_task_view, to_user_view

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup, registry: StrategyRegistry) -> None:
        self._stores = store_group
        self._registry = registry

    async def create_task(
        self,
        task_type: str,
        title: str,
        assigned_user_id: int,
    ) -> TaskView:
        """创建任务：状态 1、未关闭、custom_data 为空

        Raises:
            ValidationFailedError: 参数缺失 / 标题过长 / 任务类型未注册
            UserNotFoundError: 负责人不存在
        """
        if not task_type or not task_type.strip():
            raise ValidationFailedError("Task type is required.")
        if not title or not title.strip():
            raise ValidationFailedError("Title is required.")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationFailedError(
                f"Title cannot exceed {TITLE_MAX_LENGTH} characters."
            )
        if assigned_user_id <= 0:
            raise ValidationFailedError("Assigned user is required.")

        strategy = self._registry.resolve(task_type.strip())
        await self._require_user(assigned_user_id)

        now = datetime.now(UTC)
        task = Task(
            task_id=str(ULID()),
            task_type=strategy.task_type,
            title=title,
            current_status=INITIAL_STATUS,
            is_closed=False,
            assigned_user_id=assigned_user_id,
            custom_data={},
            created_at=now,
            updated_at=now,
        )
        await create_task(self._stores.conn, self._stores.task_store, task)

        log.info(
            "task_created",
            task_id=task.task_id,
            task_type=task.task_type,
            assigned_user_id=assigned_user_id,
        )
        return await self._build_view(task)

    async def change_status(
        self,
        task_id: str,
        target_status: int,
        assigned_user_id: int,
        custom_data: dict[str, Any] | None = None,
    ) -> TaskView:
        """变更任务状态并追加流转记录

        Raises:
            ValidationFailedError: 负责人缺失或违反流转规则
            TaskNotFoundError: 任务不存在
            UserNotFoundError: 新负责人不存在
        """
        if assigned_user_id <= 0:
            raise ValidationFailedError("Next assigned user is required.")

        task = await self._require_task(task_id)
        strategy = self._registry.resolve(task.task_type)
        await self._require_user(assigned_user_id)

        outcome = evaluate_transition(
            task,
            target_status,
            custom_data,
            assigned_user_id,
            strategy,
        )

        now = datetime.now(UTC)
        updated = task.model_copy(
            update={
                "current_status": outcome.to_status,
                "assigned_user_id": outcome.assigned_user_id,
                "custom_data": outcome.custom_data,
                "updated_at": now,
            }
        )
        change = StatusChange(
            change_id=str(ULID()),
            task_id=task.task_id,
            from_status=outcome.from_status,
            to_status=outcome.to_status,
            assigned_user_id=outcome.assigned_user_id,
            changed_at=now,
        )
        await update_task_and_append_status_change(
            self._stores.conn,
            self._stores.task_store,
            self._stores.status_change_store,
            updated,
            change,
        )

        log.info(
            "task_status_changed",
            task_id=task.task_id,
            from_status=outcome.from_status,
            to_status=outcome.to_status,
            direction=outcome.direction.value,
            assigned_user_id=outcome.assigned_user_id,
        )
        return await self._build_view(updated)

    async def close_task(self, task_id: str) -> TaskView:
        """关闭处于最终状态的任务（不追加流转记录）

        Raises:
            TaskNotFoundError: 任务不存在
            ValidationFailedError: 已关闭或未处于最终状态
        """
        task = await self._require_task(task_id)
        strategy = self._registry.resolve(task.task_type)

        outcome = evaluate_close(task, strategy)

        updated = task.model_copy(
            update={
                "is_closed": outcome.is_closed,
                "updated_at": datetime.now(UTC),
            }
        )
        await update_task_only(self._stores.conn, self._stores.task_store, updated)

        log.info("task_closed", task_id=task.task_id, final_status=outcome.final_status)
        return await self._build_view(updated)

    async def get_task(self, task_id: str) -> TaskView:
        """查询任务详情（含流转历史）"""
        task = await self._require_task(task_id)
        return await self._build_view(task)

    async def get_user_tasks(self, user_id: int) -> list[TaskView]:
        """查询指定用户负责的全部任务，按 updated_at 倒序

        用户存在但没有任务时返回空列表；用户不存在时抛 UserNotFoundError。
        """
        await self._require_user(user_id)
        tasks = await self._stores.task_store.list_tasks_for_user(user_id)
        return [await self._build_view(task) for task in tasks]

    async def list_users(self) -> list[UserView]:
        users = await self._stores.user_store.list_users()
        return [to_user_view(user) for user in users]

    # ============================================================
    # 内部工具
    # ============================================================

    async def _require_task(self, task_id: str) -> Task:
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def _require_user(self, user_id: int) -> User:
        user = await self._stores.user_store.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _build_view(self, task: Task) -> TaskView:
        strategy = self._registry.resolve(task.task_type)
        history = await self._stores.status_change_store.get_history_for_task(task.task_id)
        user_ids = {task.assigned_user_id, *(c.assigned_user_id for c in history)}
        users = await self._stores.user_store.get_users_by_ids(user_ids)
        return to_task_view(task, strategy, history, users)
