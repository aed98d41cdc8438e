"""CLI 入口模块 -- python -m taskrail.core <command>

支持的命令：
  init-db    初始化数据库结构并写入固定用户
  seed-demo  在 init-db 基础上写入演示任务（tasks 表为空时）
"""

import asyncio
import sys

from .config import get_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m taskrail.core <command>")
        print("命令:")
        print("  init-db    初始化数据库结构并写入固定用户")
        print("  seed-demo  写入演示任务（tasks 表为空时）")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database(with_demo_tasks=False))
    elif command == "seed-demo":
        asyncio.run(init_database(with_demo_tasks=True))
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, seed-demo")
        sys.exit(1)


async def init_database(with_demo_tasks: bool) -> None:
    """初始化数据库，可选写入演示任务"""
    from .registry import build_default_registry
    from .seed import seed_demo_tasks, seed_users
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)

    try:
        user_count = await seed_users(store_group)
        print(f"已写入 {user_count} 个用户")
        if with_demo_tasks:
            task_count = await seed_demo_tasks(store_group, build_default_registry())
            if task_count:
                print(f"已写入 {task_count} 个演示任务")
            else:
                print("tasks 表非空，跳过演示任务")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
