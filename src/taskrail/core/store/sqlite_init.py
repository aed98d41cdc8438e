"""SQLite 数据库初始化

PRAGMA 配置 + users / tasks / status_changes 三张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# users 表 DDL
_USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    user_id  INTEGER PRIMARY KEY,
    name     TEXT NOT NULL,
    email    TEXT NOT NULL DEFAULT ''
);
"""

# tasks 表 DDL
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    task_id           TEXT PRIMARY KEY,
    task_type         TEXT NOT NULL,
    title             TEXT NOT NULL,
    current_status    INTEGER NOT NULL DEFAULT 1,
    is_closed         INTEGER NOT NULL DEFAULT 0,
    assigned_user_id  INTEGER NOT NULL,
    custom_data       TEXT NOT NULL DEFAULT '{}',
    created_at        TEXT NOT NULL,
    updated_at        TEXT NOT NULL,

    FOREIGN KEY (assigned_user_id) REFERENCES users(user_id)
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_assigned_user_id ON tasks(assigned_user_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_task_type ON tasks(task_type);",
    (
        "CREATE INDEX IF NOT EXISTS idx_tasks_user_closed "
        "ON tasks(assigned_user_id, is_closed);"
    ),
]

# status_changes 表 DDL（append-only，随任务级联删除）
_STATUS_CHANGES_DDL = """
CREATE TABLE IF NOT EXISTS status_changes (
    change_id         TEXT PRIMARY KEY,
    task_id           TEXT NOT NULL,
    from_status       INTEGER NOT NULL,
    to_status         INTEGER NOT NULL,
    assigned_user_id  INTEGER NOT NULL,
    changed_at        TEXT NOT NULL,

    FOREIGN KEY (task_id) REFERENCES tasks(task_id) ON DELETE CASCADE,
    FOREIGN KEY (assigned_user_id) REFERENCES users(user_id)
);
"""

_STATUS_CHANGES_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_status_changes_task_id ON status_changes(task_id);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表（被引用的表在前）
    await conn.execute(_USERS_DDL)
    await conn.execute(_TASKS_DDL)
    await conn.execute(_STATUS_CHANGES_DDL)

    for idx_sql in _TASKS_INDEXES + _STATUS_CHANGES_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
