import datetime as dt
from pydantic import BaseModel, ConfigDict, Field


class WorkPackageBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject: str | None = Field(default=None, max_length=255)
    description: str | None = None
    type_id: int | None = Field(default=None, alias="typeId")
    start_date: dt.date | None = Field(default=None, alias="startDate")
    due_date: dt.date | None = Field(default=None, alias="dueDate")
    date: dt.date | None = None
    category_id: int | None = Field(default=None, alias="categoryId")
    version_id: int | None = Field(default=None, alias="versionId")


class WorkPackageCreate(WorkPackageBase):
    subject: str = Field(..., min_length=1, max_length=255)


class WorkPackageUpdate(WorkPackageBase):
    pass


class WorkPackageFormIn(WorkPackageBase):
    pass


class AttachmentIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(..., min_length=1, max_length=255, alias="fileName")
    content_type: str | None = Field(default=None, alias="contentType")
    filesize: int = Field(default=0, ge=0, alias="fileSize")
