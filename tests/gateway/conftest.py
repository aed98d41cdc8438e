"""Gateway 测试配置 -- FastAPI app + httpx AsyncClient"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskrail.core.catalog import TaskTypeCatalog
from taskrail.core.registry import build_default_registry
from taskrail.core.seed import seed_users
from taskrail.core.store import create_store_group

_ENV_KEYS = ["TASKRAIL_DB_PATH", "LOGFIRE_SEND_TO_LOGFIRE"]


@pytest_asyncio.fixture
async def test_app(tmp_path: Path):
    """创建测试用 FastAPI app 实例（绕过 lifespan 手动初始化）"""
    os.environ["TASKRAIL_DB_PATH"] = str(tmp_path / "test.db")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from taskrail.gateway.main import create_app

    app = create_app()

    store_group = await create_store_group(str(tmp_path / "test.db"))
    await seed_users(store_group)
    registry = build_default_registry()
    app.state.store_group = store_group
    app.state.registry = registry
    app.state.catalog = TaskTypeCatalog(registry)

    yield app

    await store_group.conn.close()
    for key in _ENV_KEYS:
        os.environ.pop(key, None)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
