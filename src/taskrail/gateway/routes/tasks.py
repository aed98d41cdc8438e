"""任务路由

POST /api/tasks: 创建任务
GET /api/tasks/{task_id}: 任务详情，含流转历史
PUT /api/tasks/{task_id}/status: 状态流转
PUT /api/tasks/{task_id}/close: 关闭任务

业务异常由 errors 模块统一映射为错误响应。
"""

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from ..deps import get_task_service
from ..schemas import ChangeStatusRequest, CreateTaskRequest, dump
from ..services.task_service import TaskService

router = APIRouter()


@router.post("/api/tasks", status_code=201)
async def create_task(
    body: CreateTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """创建任务 -- 201 + 任务视图"""
    view = await service.create_task(
        task_type=body.task_type,
        title=body.title,
        assigned_user_id=body.assigned_user_id,
    )
    return JSONResponse(status_code=201, content=dump(view))


@router.get("/api/tasks/{task_id}")
async def get_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """查询任务详情"""
    view = await service.get_task(task_id)
    return JSONResponse(content=dump(view))


@router.put("/api/tasks/{task_id}/status")
async def change_status(
    task_id: str,
    body: ChangeStatusRequest,
    service: TaskService = Depends(get_task_service),
):
    """变更任务状态

    - 前进：只能 +1，需提交目标状态要求的 customData
    - 回退：可跳到任意更早状态，customData 被忽略
    """
    view = await service.change_status(
        task_id=task_id,
        target_status=body.target_status,
        assigned_user_id=body.assigned_user_id,
        custom_data=body.custom_data,
    )
    return JSONResponse(content=dump(view))


@router.put("/api/tasks/{task_id}/close")
async def close_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """关闭处于最终状态的任务"""
    view = await service.close_task(task_id)
    return JSONResponse(content=dump(view))
