"""用户路由

GET /api/users: 全部用户，按 id 正序
GET /api/users/{user_id}/tasks: 指定用户负责的任务（含已关闭），按 updatedAt 倒序
"""

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from ..deps import get_task_service
from ..schemas import dump
from ..services.task_service import TaskService

router = APIRouter()


@router.get("/api/users")
async def list_users(service: TaskService = Depends(get_task_service)):
    users = await service.list_users()
    return JSONResponse(content=dump(users))


@router.get("/api/users/{user_id}/tasks")
async def get_user_tasks(
    user_id: int,
    service: TaskService = Depends(get_task_service),
):
    """用户存在但无任务时返回 200 + 空列表；用户不存在时 404"""
    views = await service.get_user_tasks(user_id)
    return JSONResponse(content=dump(views))
