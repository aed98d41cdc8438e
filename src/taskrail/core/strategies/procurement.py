"""Procurement 任务类型：询价 -> 采购"""

from ..models.task_type import FieldDefinition, StatusDefinition
from .base import TaskTypeStrategy

PROCUREMENT = TaskTypeStrategy(
    task_type="Procurement",
    statuses=(
        StatusDefinition(status=1, label="Created"),
        StatusDefinition(status=2, label="Supplier offers received"),
        StatusDefinition(status=3, label="Purchase completed"),
    ),
    fields_by_status={
        2: (
            FieldDefinition(field_name="priceQuote1", label="Price Quote 1"),
            FieldDefinition(field_name="priceQuote2", label="Price Quote 2"),
        ),
        3: (FieldDefinition(field_name="receipt", label="Receipt"),),
    },
)
