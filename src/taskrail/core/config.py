"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、标题长度限制等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKRAIL_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKRAIL_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskrail.db"),
    )


# 任务标题最大长度（与 tasks.title 列约束一致）
TITLE_MAX_LENGTH: int = 200

# 任务类型名称最大长度
TASK_TYPE_MAX_LENGTH: int = 50

# 初始状态：所有任务类型的状态序列都从 1 开始
INITIAL_STATUS: int = 1
