from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from taskboard.api.dependencies import get_task_service, require_identity
from taskboard.core.exceptions import validation_error
from taskboard.models.auth import Identity
from taskboard.models.task import TaskCreate, TaskDetail, TaskRecord, TaskUpdate
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

TASK_CREATE_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": TaskCreate.model_json_schema(by_alias=True)}},
    }
}


@router.post("", status_code=201, response_model=TaskRecord, openapi_extra=TASK_CREATE_BODY)
async def create_task(
    request: Request,
    identity: Identity = Depends(require_identity),
    tasks: TaskService = Depends(get_task_service)
):
    """
    Create a task owned by the authenticated caller.

    The body is read here rather than declared as a parameter, so an
    unauthenticated request is rejected before its body is looked at.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise validation_error("Request body is not valid JSON", field="body") from None

    try:
        data = TaskCreate.model_validate(payload)
    except PydanticValidationError as e:
        errors = [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)]
        raise RequestValidationError(errors) from e

    return await tasks.create(data, identity)


@router.get("", response_model=List[TaskDetail])
async def list_tasks(tasks: TaskService = Depends(get_task_service)):
    return await tasks.list_detailed()


@router.put("/{task_id}", response_model=TaskRecord)
async def update_task(
    task_id: str,
    changes: TaskUpdate,
    tasks: TaskService = Depends(get_task_service)
):
    return await tasks.update(task_id, changes)


@router.delete("/{task_id}")
async def delete_task(task_id: str, tasks: TaskService = Depends(get_task_service)):
    await tasks.delete(task_id)
    return {"message": "Task deleted"}
