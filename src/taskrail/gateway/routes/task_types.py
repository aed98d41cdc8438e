"""任务类型目录路由

GET /api/task-types: 全部任务类型的状态与字段要求，供客户端生成表单。
"""

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse
from taskrail.core.catalog import TaskTypeCatalog

from ..deps import get_catalog
from ..schemas import dump
from ..services.task_mapper import to_task_type_view

router = APIRouter()


@router.get("/api/task-types")
async def list_task_types(catalog: TaskTypeCatalog = Depends(get_catalog)):
    views = [to_task_type_view(info) for info in catalog.list_all()]
    return JSONResponse(content=dump(views))
