"""事务一致性单元测试

测试内容：
1. 任务快照更新 + 流转记录追加原子性
2. 回滚验证（任一步失败时两者都不写入）
3. 外键约束（负责人必须存在）
"""

from datetime import UTC, datetime

import aiosqlite
import pytest
from taskrail.core.models import StatusChange
from taskrail.core.store.transaction import (
    create_task,
    update_task_and_append_status_change,
    update_task_only,
)


def _change(task_id: str, change_id: str = "01JCHANGE00000000000000001", user_id: int = 2):
    return StatusChange(
        change_id=change_id,
        task_id=task_id,
        from_status=1,
        to_status=2,
        assigned_user_id=user_id,
        changed_at=datetime.now(UTC),
    )


class TestTransactionAtomicity:
    """事务一致性测试"""

    async def test_update_and_append_success(self, store_group, task_factory):
        task = task_factory()
        await create_task(store_group.conn, store_group.task_store, task)

        updated = task.model_copy(update={"current_status": 2, "assigned_user_id": 2})
        await update_task_and_append_status_change(
            store_group.conn,
            store_group.task_store,
            store_group.status_change_store,
            updated,
            _change(task.task_id),
        )

        loaded = await store_group.task_store.get_task(task.task_id)
        history = await store_group.status_change_store.get_history_for_task(task.task_id)
        assert loaded.current_status == 2
        assert len(history) == 1
        assert history[0].to_status == 2

    async def test_rollback_when_append_fails(self, store_group, task_factory):
        """流转记录写入失败（主键冲突）时任务快照也不更新"""
        task = task_factory()
        await create_task(store_group.conn, store_group.task_store, task)
        await update_task_and_append_status_change(
            store_group.conn,
            store_group.task_store,
            store_group.status_change_store,
            task.model_copy(update={"current_status": 2}),
            _change(task.task_id),
        )

        with pytest.raises(aiosqlite.IntegrityError):
            await update_task_and_append_status_change(
                store_group.conn,
                store_group.task_store,
                store_group.status_change_store,
                task.model_copy(update={"current_status": 3}),
                _change(task.task_id),
            )

        loaded = await store_group.task_store.get_task(task.task_id)
        history = await store_group.status_change_store.get_history_for_task(task.task_id)
        assert loaded.current_status == 2
        assert len(history) == 1

    async def test_rollback_when_assignee_missing(self, store_group, task_factory):
        """负责人不存在时外键约束失败，整体回滚"""
        task = task_factory()
        await create_task(store_group.conn, store_group.task_store, task)

        with pytest.raises(aiosqlite.IntegrityError):
            await update_task_and_append_status_change(
                store_group.conn,
                store_group.task_store,
                store_group.status_change_store,
                task.model_copy(update={"current_status": 2, "assigned_user_id": 99}),
                _change(task.task_id, user_id=99),
            )

        loaded = await store_group.task_store.get_task(task.task_id)
        assert loaded.current_status == 1
        assert loaded.assigned_user_id == 1

    async def test_create_task_rejects_unknown_user(self, store_group, task_factory):
        with pytest.raises(aiosqlite.IntegrityError):
            await create_task(
                store_group.conn,
                store_group.task_store,
                task_factory(assigned_user_id=99),
            )
        assert await store_group.task_store.count_tasks() == 0

    async def test_update_task_only_appends_no_history(self, store_group, task_factory):
        task = task_factory(current_status=3)
        await create_task(store_group.conn, store_group.task_store, task)
        await update_task_only(
            store_group.conn,
            store_group.task_store,
            task.model_copy(update={"is_closed": True}),
        )

        loaded = await store_group.task_store.get_task(task.task_id)
        assert loaded.is_closed is True
        assert await store_group.status_change_store.get_history_for_task(task.task_id) == []

    async def test_history_cascades_with_task(self, store_group, task_factory):
        """删除任务时其历史随之删除"""
        task = task_factory()
        await create_task(store_group.conn, store_group.task_store, task)
        await update_task_and_append_status_change(
            store_group.conn,
            store_group.task_store,
            store_group.status_change_store,
            task.model_copy(update={"current_status": 2}),
            _change(task.task_id),
        )

        await store_group.conn.execute("DELETE FROM tasks WHERE task_id = ?", (task.task_id,))
        await store_group.conn.commit()

        assert await store_group.status_change_store.get_history_for_task(task.task_id) == []
