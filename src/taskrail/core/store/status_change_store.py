"""StatusChangeStore SQLite 实现

status_changes 表 append-only：只允许插入，不允许更新或删除。
"""

from datetime import datetime

import aiosqlite

from ..models.task import StatusChange


class SqliteStatusChangeStore:
    """StatusChangeStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append_status_change(self, change: StatusChange) -> None:
        """追加流转记录（append-only）

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.execute(
            """
            INSERT INTO status_changes (change_id, task_id, from_status, to_status,
                                        assigned_user_id, changed_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                change.change_id,
                change.task_id,
                change.from_status,
                change.to_status,
                change.assigned_user_id,
                change.changed_at.isoformat(),
            ),
        )

    async def get_history_for_task(self, task_id: str) -> list[StatusChange]:
        """查询指定任务的流转历史，按 changed_at 正序

        同一时刻的记录按插入顺序排列。
        """
        cursor = await self._conn.execute(
            """
            SELECT change_id, task_id, from_status, to_status, assigned_user_id, changed_at
            FROM status_changes
            WHERE task_id = ?
            ORDER BY changed_at ASC, rowid ASC
            """,
            (task_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_change(row) for row in rows]

    @staticmethod
    def _row_to_change(row: aiosqlite.Row) -> StatusChange:
        return StatusChange(
            change_id=row[0],
            task_id=row[1],
            from_status=row[2],
            to_status=row[3],
            assigned_user_id=row[4],
            changed_at=datetime.fromisoformat(row[5]),
        )
