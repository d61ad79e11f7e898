# taskboard/models/directory.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DirectoryCreate(BaseModel):
    name: str = Field(min_length=1)


class DirectoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)


class DirectoryRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
