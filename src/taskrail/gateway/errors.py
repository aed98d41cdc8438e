"""异常处理器 -- 将异常映射为统一错误响应

错误响应格式：
    {"error": {"code": "...", "message": "...", "errors": [...]}}

- TaskRailError 子类：按其 status_code / code 映射（400 / 404）
- 请求体 schema 错误：400 VALIDATION_FAILED
- 其他异常：记录日志后返回 500 INTERNAL_ERROR，不暴露内部细节
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from taskrail.core.exceptions import TaskRailError, ValidationFailedError

log = structlog.get_logger()


def error_response(
    status_code: int,
    code: str,
    message: str,
    errors: list[str] | None = None,
) -> JSONResponse:
    """构建统一错误响应"""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "errors": errors if errors is not None else [message],
            }
        },
    )


async def taskrail_exception_handler(request: Request, exc: TaskRailError) -> JSONResponse:
    """业务异常处理器"""
    errors = exc.errors if isinstance(exc, ValidationFailedError) else None
    await log.awarning(
        "request_rejected",
        error_code=exc.code,
        message=exc.message,
    )
    return error_response(exc.status_code, exc.code, exc.message, errors)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """请求体 schema 错误处理器（类型不匹配、JSON 格式错误等）"""
    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        message = err.get("msg", "invalid value")
        errors.append(f"{location}: {message}" if location else message)
    await log.awarning("request_validation_failed", errors=errors)
    return error_response(400, ValidationFailedError.code, "Request validation failed.", errors)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """兜底处理器：记录完整异常，返回通用 500"""
    await log.aerror(
        "unhandled_exception",
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")


def setup_exception_handlers(app: FastAPI) -> None:
    """注册全部异常处理器"""
    app.add_exception_handler(TaskRailError, taskrail_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
