"""TaskRail 异常体系

核心层只产生两类失败：
- ValidationFailedError：客户端输入不合法或违反业务规则（映射 400）
- NotFoundError：引用的实体（任务 / 用户）不存在（映射 404）

其他异常（例如持久化失败）原样向上传播，由传输层统一映射为 500。
"""


class TaskRailError(Exception):
    """TaskRail 基础异常"""

    code: str = "TASKRAIL_ERROR"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailedError(TaskRailError):
    """输入校验或业务规则校验失败

    可以携带多条错误信息（例如一次提交缺少多个必填字段），
    单一原因的失败只携带一条。
    """

    code = "VALIDATION_FAILED"
    status_code = 400

    def __init__(self, errors: list[str] | str) -> None:
        """
        Args:
            errors: 错误信息列表，或单条错误信息
        """
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class UnknownTaskTypeError(ValidationFailedError):
    """任务类型未注册

    任务类型名来自客户端输入而不是实体引用，因此属于校验失败而非 NotFound。
    """

    code = "UNKNOWN_TASK_TYPE"

    def __init__(self, task_type: str) -> None:
        super().__init__(f"Unknown task type: '{task_type}'.")
        self.task_type = task_type


class TaskAlreadyClosedError(ValidationFailedError):
    """任务已关闭，不允许任何状态变更或重复关闭"""

    code = "TASK_ALREADY_CLOSED"


class NoOpTransitionError(ValidationFailedError):
    """目标状态与当前状态相同"""

    code = "NO_OP_TRANSITION"

    def __init__(self, current_status: int) -> None:
        super().__init__(f"Task is already at status {current_status}.")


class NonSequentialForwardError(ValidationFailedError):
    """前进流转跳过了中间状态"""

    code = "NON_SEQUENTIAL_FORWARD"

    def __init__(self, current_status: int) -> None:
        super().__init__(
            f"Forward moves must be sequential. Current status is {current_status}, "
            f"target must be {current_status + 1}."
        )


class ExceedsMaxStatusError(ValidationFailedError):
    """目标状态超过该任务类型的最大状态"""

    code = "EXCEEDS_MAX_STATUS"

    def __init__(self, target_status: int, max_status: int, task_type: str) -> None:
        super().__init__(
            f"Target status {target_status} exceeds the maximum status {max_status} "
            f"for task type '{task_type}'."
        )


class BelowMinStatusError(ValidationFailedError):
    """目标状态小于 1"""

    code = "BELOW_MIN_STATUS"

    def __init__(self) -> None:
        super().__init__("Target status cannot be less than 1.")


class NotAtFinalStatusError(ValidationFailedError):
    """只有处于最终状态的任务才能关闭"""

    code = "NOT_AT_FINAL_STATUS"

    def __init__(self, current_status: int, max_status: int) -> None:
        super().__init__(
            f"Task can only be closed from the final status ({max_status}). "
            f"Current status is {current_status}."
        )


class NotFoundError(TaskRailError):
    """引用的实体不存在"""

    code = "NOT_FOUND"
    status_code = 404


class TaskNotFoundError(NotFoundError):
    """任务不存在"""

    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with ID {task_id} not found.")
        self.task_id = task_id


class UserNotFoundError(NotFoundError):
    """用户不存在"""

    code = "USER_NOT_FOUND"

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with ID {user_id} not found.")
        self.user_id = user_id
