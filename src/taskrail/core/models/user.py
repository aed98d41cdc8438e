"""User Domain Model

对核心层只读；Task 与 StatusChange 仅通过 ID 弱引用用户。
"""

from pydantic import BaseModel, Field


class User(BaseModel):
    """用户"""

    user_id: int = Field(ge=1, description="用户 ID")
    name: str = Field(description="显示名称")
    email: str = Field(default="", description="邮箱")
