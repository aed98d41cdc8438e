"""领域模型 -> HTTP 视图转换"""

from taskrail.core.models import StatusChange, Task, TaskTypeInfo, User
from taskrail.core.strategies import TaskTypeStrategy

from ..schemas import (
    FieldDefinitionView,
    StatusDefinitionView,
    StatusHistoryView,
    TaskTypeView,
    TaskView,
    UserView,
)


def _user_name(users: dict[int, User], user_id: int) -> str:
    user = users.get(user_id)
    return user.name if user else ""


def to_task_view(
    task: Task,
    strategy: TaskTypeStrategy,
    history: list[StatusChange],
    users: dict[int, User],
) -> TaskView:
    """构建任务详情视图

    Args:
        task: 任务快照
        strategy: 任务类型策略（用于当前状态标签）
        history: 流转历史，已按 changed_at 正序
        users: 负责人 / 历史中涉及的用户，user_id -> User
    """
    return TaskView(
        id=task.task_id,
        task_type=task.task_type,
        title=task.title,
        current_status=task.current_status,
        current_status_label=strategy.status_label(task.current_status),
        is_closed=task.is_closed,
        assigned_user_id=task.assigned_user_id,
        assigned_user_name=_user_name(users, task.assigned_user_id),
        custom_data=task.custom_data,
        created_at=task.created_at,
        updated_at=task.updated_at,
        status_history=[
            StatusHistoryView(
                from_status=change.from_status,
                to_status=change.to_status,
                assigned_user_id=change.assigned_user_id,
                assigned_user_name=_user_name(users, change.assigned_user_id),
                changed_at=change.changed_at,
            )
            for change in history
        ],
    )


def to_user_view(user: User) -> UserView:
    return UserView(id=user.user_id, name=user.name, email=user.email)


def to_task_type_view(info: TaskTypeInfo) -> TaskTypeView:
    return TaskTypeView(
        task_type=info.task_type,
        max_status=info.max_status,
        statuses=[StatusDefinitionView(status=s.status, label=s.label) for s in info.statuses],
        fields_by_status={
            status: [
                FieldDefinitionView(
                    field_name=f.field_name,
                    label=f.label,
                    field_type=f.field_type.value,
                    required=f.required,
                    array_length=f.array_length,
                )
                for f in fields
            ]
            for status, fields in info.fields_by_status.items()
        },
    )
