"""枚举定义

包含字段类型标签 FieldType 与流转方向 TransitionDirection。
"""

from enum import StrEnum


class FieldType(StrEnum):
    """自定义字段类型标签 -- 供前端生成表单"""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"


class TransitionDirection(StrEnum):
    """状态流转方向"""

    # 前进：只能 +1，需要校验自定义数据
    FORWARD = "forward"
    # 回退：可跳到任意更早状态，不校验
    BACKWARD = "backward"
