"""SQLite Store 单元测试

测试内容：
1. 数据库初始化（WAL、表结构）
2. TaskStore 读写与按用户查询排序
3. StatusChangeStore 历史顺序
4. UserStore 查询与幂等写入
"""

from datetime import UTC, datetime, timedelta

import aiosqlite
from taskrail.core.models import StatusChange, User
from taskrail.core.store.sqlite_init import verify_wal_mode


class TestSqliteInit:
    async def test_wal_mode_enabled(self, store_group):
        assert await verify_wal_mode(store_group.conn) is True

    async def test_tables_created(self, db_conn: aiosqlite.Connection):
        cursor = await db_conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        )
        names = [row[0] for row in await cursor.fetchall()]
        assert {"users", "tasks", "status_changes"} <= set(names)

    async def test_init_is_idempotent(self, db_conn: aiosqlite.Connection):
        from taskrail.core.store.sqlite_init import init_db

        await init_db(db_conn)
        await init_db(db_conn)


class TestTaskStore:
    async def test_create_and_get(self, store_group, task_factory):
        task = task_factory(custom_data={"priceQuote1": "100"})
        await store_group.task_store.create_task(task)
        await store_group.conn.commit()

        loaded = await store_group.task_store.get_task(task.task_id)
        assert loaded is not None
        assert loaded.task_type == "Procurement"
        assert loaded.current_status == 1
        assert loaded.is_closed is False
        assert loaded.custom_data == {"priceQuote1": "100"}
        assert loaded.created_at == task.created_at

    async def test_get_missing_returns_none(self, store_group):
        assert await store_group.task_store.get_task("missing") is None

    async def test_update_task(self, store_group, task_factory):
        task = task_factory()
        await store_group.task_store.create_task(task)
        updated = task.model_copy(
            update={
                "current_status": 2,
                "assigned_user_id": 3,
                "custom_data": {"priceQuote1": "1", "priceQuote2": "2"},
                "is_closed": True,
                "updated_at": task.updated_at + timedelta(seconds=5),
            }
        )
        await store_group.task_store.update_task(updated)
        await store_group.conn.commit()

        loaded = await store_group.task_store.get_task(task.task_id)
        assert loaded.current_status == 2
        assert loaded.assigned_user_id == 3
        assert loaded.is_closed is True
        assert loaded.custom_data == {"priceQuote1": "1", "priceQuote2": "2"}
        assert loaded.updated_at == updated.updated_at

    async def test_list_for_user_ordered_by_updated_at_desc(self, store_group, task_factory):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        older = task_factory(task_id="01JTEST0000000000000000001").model_copy(
            update={"updated_at": base}
        )
        newer = task_factory(task_id="01JTEST0000000000000000002").model_copy(
            update={"updated_at": base + timedelta(hours=1)}
        )
        other_user = task_factory(task_id="01JTEST0000000000000000003", assigned_user_id=2)
        for task in (older, newer, other_user):
            await store_group.task_store.create_task(task)
        await store_group.conn.commit()

        tasks = await store_group.task_store.list_tasks_for_user(1)
        assert [t.task_id for t in tasks] == [newer.task_id, older.task_id]

    async def test_count_tasks(self, store_group, task_factory):
        assert await store_group.task_store.count_tasks() == 0
        await store_group.task_store.create_task(task_factory())
        await store_group.conn.commit()
        assert await store_group.task_store.count_tasks() == 1


class TestStatusChangeStore:
    async def test_history_ordered_by_changed_at(self, store_group, task_factory):
        task = task_factory()
        await store_group.task_store.create_task(task)
        base = datetime(2026, 1, 1, tzinfo=UTC)
        later = StatusChange(
            change_id="01JCHANGE00000000000000002",
            task_id=task.task_id,
            from_status=2,
            to_status=1,
            assigned_user_id=2,
            changed_at=base + timedelta(minutes=1),
        )
        earlier = StatusChange(
            change_id="01JCHANGE00000000000000001",
            task_id=task.task_id,
            from_status=1,
            to_status=2,
            assigned_user_id=1,
            changed_at=base,
        )
        await store_group.status_change_store.append_status_change(later)
        await store_group.status_change_store.append_status_change(earlier)
        await store_group.conn.commit()

        history = await store_group.status_change_store.get_history_for_task(task.task_id)
        assert [c.change_id for c in history] == [earlier.change_id, later.change_id]

    async def test_history_empty_for_new_task(self, store_group, task_factory):
        task = task_factory()
        await store_group.task_store.create_task(task)
        await store_group.conn.commit()
        assert await store_group.status_change_store.get_history_for_task(task.task_id) == []


class TestUserStore:
    async def test_list_users_ordered_by_id(self, store_group):
        users = await store_group.user_store.list_users()
        assert [u.user_id for u in users] == [1, 2, 3, 4]
        assert users[0].name == "Alice Johnson"

    async def test_get_user(self, store_group):
        user = await store_group.user_store.get_user(2)
        assert user == User(user_id=2, name="Bob Smith", email="bob@example.com")
        assert await store_group.user_store.get_user(99) is None

    async def test_get_users_by_ids_skips_missing(self, store_group):
        users = await store_group.user_store.get_users_by_ids([1, 3, 99])
        assert sorted(users) == [1, 3]
        assert users[3].name == "Charlie Brown"

    async def test_get_users_by_ids_empty(self, store_group):
        assert await store_group.user_store.get_users_by_ids([]) == {}

    async def test_upsert_updates_existing(self, store_group):
        await store_group.user_store.upsert_users(
            [User(user_id=1, name="Alice J.", email="alice@example.com")]
        )
        await store_group.conn.commit()
        user = await store_group.user_store.get_user(1)
        assert user.name == "Alice J."

    async def test_out_of_range_ids_not_found(self, store_group):
        """超出 SQLite INTEGER 范围的 ID 查询结果为空而不是报错"""
        huge = 10**20
        assert await store_group.user_store.get_user(huge) is None
        users = await store_group.user_store.get_users_by_ids([1, huge])
        assert sorted(users) == [1]
