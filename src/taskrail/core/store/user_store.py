"""UserStore SQLite 实现 -- 用户对核心层只读，仅种子数据写入"""

from collections.abc import Iterable

import aiosqlite

from ..models.user import User

# SQLite INTEGER 上限（64 位有符号）
_SQLITE_MAX_INTEGER = 2**63 - 1


def _storable_id(user_id: int) -> bool:
    return 0 < user_id <= _SQLITE_MAX_INTEGER


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get_user(self, user_id: int) -> User | None:
        """按 ID 查询用户；超出 SQLite INTEGER 范围的 ID 视为不存在"""
        if not _storable_id(user_id):
            return None
        cursor = await self._conn.execute(
            "SELECT user_id, name, email FROM users WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    async def list_users(self) -> list[User]:
        """全部用户，按 user_id 正序"""
        cursor = await self._conn.execute(
            "SELECT user_id, name, email FROM users ORDER BY user_id ASC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_user(row) for row in rows]

    async def get_users_by_ids(self, user_ids: Iterable[int]) -> dict[int, User]:
        """批量查询用户，返回 user_id -> User；不存在的 ID 不出现在结果中"""
        ids = sorted(uid for uid in set(user_ids) if _storable_id(uid))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        cursor = await self._conn.execute(
            f"SELECT user_id, name, email FROM users WHERE user_id IN ({placeholders})",
            ids,
        )
        rows = await cursor.fetchall()
        return {row[0]: self._row_to_user(row) for row in rows}

    async def upsert_users(self, users: Iterable[User]) -> None:
        """插入或更新用户（幂等）

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.executemany(
            """
            INSERT INTO users (user_id, name, email) VALUES (?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET name = excluded.name, email = excluded.email
            """,
            [(u.user_id, u.name, u.email) for u in users],
        )

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(user_id=row[0], name=row[1], email=row[2])
