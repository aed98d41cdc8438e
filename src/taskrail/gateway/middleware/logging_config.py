"""structlog 配置模块

环境变量：
    TASKRAIL_LOG_FORMAT: "dev"（默认，控制台可读输出）或 "json"
    TASKRAIL_LOG_LEVEL: 日志级别，默认 INFO
    LOGFIRE_SEND_TO_LOGFIRE: "true" 时启用 Logfire APM（observability extra）

所有日志都带 service="taskrail"，标准库 logging（uvicorn 等）同样经过 structlog 渲染。
"""

import logging
import os

import structlog

SERVICE_NAME = "taskrail"


def _add_service_name(
    logger: logging.Logger, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging() -> None:
    """初始化 structlog，并把标准库 logging 的输出接入同一渲染器"""
    log_format = os.environ.get("TASKRAIL_LOG_FORMAT", "dev").lower()
    log_level = os.environ.get("TASKRAIL_LOG_LEVEL", "INFO").upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service_name,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_build_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # aiosqlite 在 DEBUG 级别逐条输出 SQL 调用
    logging.getLogger("aiosqlite").setLevel(max(root_logger.level, logging.INFO))


def setup_logfire(app=None) -> None:
    """LOGFIRE_SEND_TO_LOGFIRE=true 时初始化 Logfire 并接入 FastAPI

    初始化失败（未安装 extra / 缺少 token）时记录 warning 并继续使用本地日志。
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return

    try:
        import logfire

        logfire.configure(service_name=SERVICE_NAME)
        if app is not None:
            logfire.instrument_fastapi(app)
    except Exception:
        structlog.get_logger().warning("logfire_init_failed", exc_info=True)
