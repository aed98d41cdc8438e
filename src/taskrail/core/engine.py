"""状态流转引擎 -- 纯函数，无共享可变状态

状态为 1..max_status 的整数，“已关闭”是与状态正交的终止标记：
关闭后的任务冻结在最后所处的状态。

流转规则：
1. 已关闭任务不可流转
2. 目标状态等于当前状态视为无效操作
3. 前进：只能 +1，不能超过 max_status，需通过策略的数据校验，
   提交数据合并进已有 custom_data（新增或覆盖，从不删除）
4. 回退：可一步跳到任意更早状态（>= 1），不校验也不合并数据
5. 关闭：仅当任务未关闭且处于 max_status
"""

from typing import Any

from pydantic import BaseModel, Field

from .config import INITIAL_STATUS
from .exceptions import (
    BelowMinStatusError,
    ExceedsMaxStatusError,
    NonSequentialForwardError,
    NoOpTransitionError,
    NotAtFinalStatusError,
    TaskAlreadyClosedError,
    ValidationFailedError,
)
from .models.enums import TransitionDirection
from .models.task import Task
from .strategies import TaskTypeStrategy


class TransitionOutcome(BaseModel):
    """一次合法流转的评估结果

    from_status / to_status / assigned_user_id 即需要追加的历史记录内容。
    """

    from_status: int
    to_status: int
    direction: TransitionDirection
    custom_data: dict[str, Any] = Field(description="流转后的完整 custom_data")
    assigned_user_id: int = Field(description="新负责人 ID")


class CloseOutcome(BaseModel):
    """关闭评估结果"""

    is_closed: bool = True
    final_status: int


def merge_custom_data(
    existing: dict[str, Any],
    submitted: dict[str, Any],
) -> dict[str, Any]:
    """合并自定义数据：新键追加，已有键覆盖，从不删除

    返回新字典，不修改入参。
    """
    merged = dict(existing)
    merged.update(submitted)
    return merged


def evaluate_transition(
    task: Task,
    target_status: int,
    submitted_data: dict[str, Any] | None,
    assigned_user_id: int,
    strategy: TaskTypeStrategy,
) -> TransitionOutcome:
    """评估任务从当前状态流转到 target_status 是否合法

    Args:
        task: 当前任务快照
        target_status: 目标状态
        submitted_data: 本次提交的自定义数据（回退时忽略）
        assigned_user_id: 流转后的负责人，每次流转都必须显式给出
        strategy: 任务所属类型的策略

    Returns:
        TransitionOutcome

    Raises:
        ValidationFailedError: 任意一条流转规则不满足
    """
    if task.is_closed:
        raise TaskAlreadyClosedError("Cannot change status of a closed task.")

    current_status = task.current_status
    if target_status == current_status:
        raise NoOpTransitionError(current_status)

    submitted = submitted_data or {}

    if target_status > current_status:
        if target_status != current_status + 1:
            raise NonSequentialForwardError(current_status)
        if target_status > strategy.max_status:
            raise ExceedsMaxStatusError(target_status, strategy.max_status, strategy.task_type)

        errors = strategy.validate_data(target_status, submitted)
        if errors:
            raise ValidationFailedError(errors)

        return TransitionOutcome(
            from_status=current_status,
            to_status=target_status,
            direction=TransitionDirection.FORWARD,
            custom_data=merge_custom_data(task.custom_data, submitted),
            assigned_user_id=assigned_user_id,
        )

    if target_status < INITIAL_STATUS:
        raise BelowMinStatusError()

    # 回退：不限制跨度，custom_data 保持不变（之前收集的数据仍可见）
    return TransitionOutcome(
        from_status=current_status,
        to_status=target_status,
        direction=TransitionDirection.BACKWARD,
        custom_data=dict(task.custom_data),
        assigned_user_id=assigned_user_id,
    )


def evaluate_close(task: Task, strategy: TaskTypeStrategy) -> CloseOutcome:
    """评估任务能否关闭

    Raises:
        TaskAlreadyClosedError: 任务已关闭
        NotAtFinalStatusError: 任务未处于最终状态
    """
    if task.is_closed:
        raise TaskAlreadyClosedError("Task is already closed.")
    if task.current_status != strategy.max_status:
        raise NotAtFinalStatusError(task.current_status, strategy.max_status)
    return CloseOutcome(final_status=task.current_status)
