"""GatewayConfig -- Gateway 配置加载

从环境变量加载 HTTP 层配置（CORS 来源、演示数据开关）。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class GatewayConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        TASKRAIL_CORS_ORIGINS: 允许的跨域来源，逗号分隔
        TASKRAIL_SEED_DEMO_TASKS: 启动时是否写入演示任务（true/false）
    """

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="允许的跨域来源",
    )
    seed_demo_tasks: bool = Field(
        default=False,
        description="tasks 表为空时是否写入演示任务",
    )


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载 Gateway 配置

    环境变量映射:
        TASKRAIL_CORS_ORIGINS -> cors_origins (默认 ["http://localhost:5173"])
        TASKRAIL_SEED_DEMO_TASKS -> seed_demo_tasks (默认 False)

    Returns:
        GatewayConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKRAIL_CORS_ORIGINS"):
        origins = [origin.strip() for origin in val.split(",") if origin.strip()]
        if origins:
            kwargs["cors_origins"] = origins

    if val := os.environ.get("TASKRAIL_SEED_DEMO_TASKS"):
        normalized = val.strip().lower()
        if normalized in _TRUE_VALUES:
            kwargs["seed_demo_tasks"] = True
        elif normalized in _FALSE_VALUES:
            kwargs["seed_demo_tasks"] = False
        else:
            log.warning(
                "invalid_seed_demo_config",
                env_var="TASKRAIL_SEED_DEMO_TASKS",
                value=val,
                fallback=False,
            )

    return GatewayConfig(**kwargs)
