# taskboard/api/directories.py
from typing import List

from fastapi import APIRouter, Depends

from taskboard.api.dependencies import get_directory_service, get_task_service
from taskboard.models.directory import DirectoryCreate, DirectoryRecord, DirectoryUpdate
from taskboard.models.task import TaskRecord
from taskboard.services.directory_service import DirectoryService
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/api/directories", tags=["directories"])


@router.post("", status_code=201, response_model=DirectoryRecord)
async def create_directory(
    data: DirectoryCreate,
    directories: DirectoryService = Depends(get_directory_service)
):
    return await directories.create(data)


@router.get("", response_model=List[DirectoryRecord])
async def list_directories(directories: DirectoryService = Depends(get_directory_service)):
    return await directories.list()


@router.put("/{directory_id}", response_model=DirectoryRecord)
async def update_directory(
    directory_id: str,
    changes: DirectoryUpdate,
    directories: DirectoryService = Depends(get_directory_service)
):
    return await directories.update(directory_id, changes)


@router.delete("/{directory_id}")
async def delete_directory(
    directory_id: str,
    directories: DirectoryService = Depends(get_directory_service)
):
    await directories.delete(directory_id)
    return {"message": "Directory deleted"}


@router.get("/{directory_id}/tasks", response_model=List[TaskRecord])
async def list_directory_tasks(directory_id: str, tasks: TaskService = Depends(get_task_service)):
    return await tasks.list_for_directory(directory_id)
