# taskboard/models/task.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from taskboard.models.directory import DirectoryRecord
from taskboard.models.user import UserPublic

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"


class TaskCreate(BaseModel):
    """
    New task. The owner is taken from the authenticated caller, so any
    ``userId`` in the body is ignored.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    description: Optional[str] = None
    completed: bool = False
    important: bool = False
    deadline: Optional[datetime] = None
    dir_id: str = Field(alias="dirId", pattern=OBJECT_ID_PATTERN)


class TaskUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    completed: Optional[bool] = None
    important: Optional[bool] = None
    deadline: Optional[datetime] = None
    dir_id: Optional[str] = Field(default=None, alias="dirId", pattern=OBJECT_ID_PATTERN)


class TaskRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    description: Optional[str] = None
    completed: bool = False
    important: bool = False
    deadline: Optional[datetime] = None
    dir_id: str = Field(alias="dirId")
    user_id: str = Field(alias="userId")


class TaskDetail(TaskRecord):
    """Task with its directory and owner resolved"""
    directory: Optional[DirectoryRecord] = None
    user: Optional[UserPublic] = None
