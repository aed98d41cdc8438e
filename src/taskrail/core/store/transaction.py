"""任务快照 + 流转历史原子事务封装

状态变更时，任务快照更新与历史记录追加必须在同一 SQLite 事务内提交，
任一步失败则整体回滚，两者都不落盘。
"""

import aiosqlite

from ..models.task import StatusChange, Task
from .protocols import StatusChangeStore, TaskStore


async def create_task(
    conn: aiosqlite.Connection,
    task_store: TaskStore,
    task: Task,
) -> None:
    """写入新任务并提交

    Raises:
        Exception: 如果事务提交失败，自动回滚
    """
    try:
        await task_store.create_task(task)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise


async def update_task_and_append_status_change(
    conn: aiosqlite.Connection,
    task_store: TaskStore,
    status_change_store: StatusChangeStore,
    task: Task,
    change: StatusChange,
) -> None:
    """在同一事务内原子提交任务快照更新和流转记录

    Args:
        conn: 数据库连接（需在同一连接上操作以保证事务性）
        task_store: TaskStore 实例
        status_change_store: StatusChangeStore 实例
        task: 流转后的任务快照
        change: 要追加的流转记录

    Raises:
        Exception: 如果事务提交失败，自动回滚
    """
    try:
        await task_store.update_task(task)
        await status_change_store.append_status_change(change)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise


async def update_task_only(
    conn: aiosqlite.Connection,
    task_store: TaskStore,
    task: Task,
) -> None:
    """仅更新任务快照，不追加流转记录（关闭任务时使用）"""
    try:
        await task_store.update_task(task)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise
