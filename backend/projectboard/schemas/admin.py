from pydantic import BaseModel, Field

from projectboard.db.models.member import ProjectRole
from projectboard.db.models.user import Role

class UserCreateIn(BaseModel):
    login: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)
    role: Role = Role.user
    full_name: str | None = None


class MemberIn(BaseModel):
    user_id: int
    role: ProjectRole = ProjectRole.member


class MemberOut(BaseModel):
    id: int
    project_id: int
    user_id: int
    role: str


class TypeIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=256)
    position: int = 1
    is_milestone: bool = False
    attribute_groups: list[dict] | None = None


class TypeGroupsIn(BaseModel):
    attribute_groups: list[dict] | None = None
