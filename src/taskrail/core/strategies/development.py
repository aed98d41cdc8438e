"""Development 任务类型：需求 -> 开发 -> 发布"""

from ..models.task_type import FieldDefinition, StatusDefinition
from .base import TaskTypeStrategy

DEVELOPMENT = TaskTypeStrategy(
    task_type="Development",
    statuses=(
        StatusDefinition(status=1, label="Created"),
        StatusDefinition(status=2, label="Specification completed"),
        StatusDefinition(status=3, label="Development completed"),
        StatusDefinition(status=4, label="Distribution completed"),
    ),
    fields_by_status={
        2: (FieldDefinition(field_name="specificationText", label="Specification Text"),),
        3: (FieldDefinition(field_name="branchName", label="Branch Name"),),
        4: (FieldDefinition(field_name="versionNumber", label="Version Number"),),
    },
)
