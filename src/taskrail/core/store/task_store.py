"""TaskStore SQLite 实现

tasks 表保存任务的当前快照；流转历史见 status_changes 表。
写操作不自动提交，事务由调用方（transaction 模块）管理。
"""

import json
from datetime import datetime

import aiosqlite

from ..models.task import Task

_COLUMNS = (
    "task_id, task_type, title, current_status, is_closed, "
    "assigned_user_id, custom_data, created_at, updated_at"
)


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(self, task: Task) -> None:
        """创建任务记录"""
        await self._conn.execute(
            f"""
            INSERT INTO tasks ({_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                task.task_id,
                task.task_type,
                task.title,
                task.current_status,
                int(task.is_closed),
                task.assigned_user_id,
                json.dumps(task.custom_data, ensure_ascii=False),
                task.created_at.isoformat(),
                task.updated_at.isoformat(),
            ),
        )

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks_for_user(self, user_id: int) -> list[Task]:
        """查询指定负责人的任务（含已关闭），按 updated_at 倒序"""
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM tasks
            WHERE assigned_user_id = ?
            ORDER BY updated_at DESC, task_id DESC
            """,
            (user_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def update_task(self, task: Task) -> None:
        """以快照整体覆盖任务的可变字段

        task_type 与 created_at 创建后不可变，不在更新范围内。
        """
        await self._conn.execute(
            """
            UPDATE tasks
            SET title = ?, current_status = ?, is_closed = ?,
                assigned_user_id = ?, custom_data = ?, updated_at = ?
            WHERE task_id = ?
            """,
            (
                task.title,
                task.current_status,
                int(task.is_closed),
                task.assigned_user_id,
                json.dumps(task.custom_data, ensure_ascii=False),
                task.updated_at.isoformat(),
                task.task_id,
            ),
        )

    async def count_tasks(self) -> int:
        """任务总数"""
        cursor = await self._conn.execute("SELECT COUNT(*) FROM tasks")
        row = await cursor.fetchone()
        return row[0] if row else 0

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            task_type=row[1],
            title=row[2],
            current_status=row[3],
            is_closed=bool(row[4]),
            assigned_user_id=row[5],
            custom_data=json.loads(row[6]),
            created_at=datetime.fromisoformat(row[7]),
            updated_at=datetime.fromisoformat(row[8]),
        )
