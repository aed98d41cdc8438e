"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 策略注册表构建 + 种子数据 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from taskrail.core.catalog import TaskTypeCatalog
from taskrail.core.config import get_db_path
from taskrail.core.registry import build_default_registry
from taskrail.core.seed import seed_demo_tasks, seed_users
from taskrail.core.store import create_store_group

from .config import load_gateway_config
from .errors import setup_exception_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, task_types, tasks, users

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB、注册表和种子数据，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group

    # 策略注册表只在启动时构建一次，之后只读
    registry = build_default_registry()
    app.state.registry = registry
    app.state.catalog = TaskTypeCatalog(registry)

    await seed_users(store_group)
    if app.state.gateway_config.seed_demo_tasks:
        seeded = await seed_demo_tasks(store_group, registry)
        log.info("demo_tasks_seeded", count=seeded)

    log.info(
        "gateway_started",
        db_path=db_path,
        task_type_count=len(registry),
        task_types=registry.task_types,
    )

    yield

    # 关闭：清理数据库连接
    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    gateway_config = load_gateway_config()

    app = FastAPI(
        title="TaskRail Gateway",
        version="0.1.0",
        description="任务流转管理 API",
        lifespan=lifespan,
    )
    app.state.gateway_config = gateway_config

    # 注册中间件（顺序：先 Trace 后 Logging，CORS 最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=gateway_config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    setup_exception_handlers(app)

    # 注册路由
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(users.router, tags=["users"])
    app.include_router(task_types.router, tags=["task-types"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
