"""应用生命周期测试 -- 通过 lifespan 启动时的初始化与种子数据"""

from pathlib import Path

from httpx import ASGITransport, AsyncClient


class TestLifespan:
    async def test_startup_seeds_users_and_demo_tasks(self, monkeypatch, tmp_path: Path):
        """开启演示数据时，启动后即可查询到演示任务"""
        monkeypatch.setenv("TASKRAIL_DB_PATH", str(tmp_path / "sqlite" / "app.db"))
        monkeypatch.setenv("TASKRAIL_SEED_DEMO_TASKS", "true")
        monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

        from taskrail.gateway.main import create_app, lifespan

        app = create_app()
        async with lifespan(app):
            async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as ac:
                users = (await ac.get("/api/users")).json()
                assert len(users) == 4

                diana_tasks = (await ac.get("/api/users/4/tasks")).json()
                assert [t["title"] for t in diana_tasks] == ["Build dashboard"]
                assert diana_tasks[0]["currentStatusLabel"] == "Created"

        assert (tmp_path / "sqlite" / "app.db").exists()

    async def test_startup_without_demo_tasks(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("TASKRAIL_DB_PATH", str(tmp_path / "app.db"))
        monkeypatch.delenv("TASKRAIL_SEED_DEMO_TASKS", raising=False)
        monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

        from taskrail.gateway.main import create_app, lifespan

        app = create_app()
        async with lifespan(app):
            async with AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as ac:
                assert (await ac.get("/api/users/1/tasks")).json() == []
                assert len((await ac.get("/api/task-types")).json()) == 2
