from pydantic import BaseModel, ConfigDict, Field

IDENTIFIER_PATTERN = r"^[a-z][a-z0-9_-]{0,99}$"

class ProjectCreate(BaseModel):
    identifier: str = Field(..., pattern=IDENTIFIER_PATTERN)
    name: str = Field(..., min_length=1, max_length=256)
    description: str | None = None
    type_ids: list[int] = Field(default_factory=list, alias="typeIds")

    model_config = ConfigDict(populate_by_name=True)


class ProjectUpdate(BaseModel):
    identifier: str | None = Field(default=None, pattern=IDENTIFIER_PATTERN)
    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None
