# taskboard/api/users.py
from typing import List

from fastapi import APIRouter, Depends, Request

from taskboard.api.dependencies import get_credential_store, get_task_service
from taskboard.core.rate_limit_config import RATE_LIMITS, limiter
from taskboard.models.task import TaskRecord
from taskboard.models.user import UserCreate, UserCreated, UserPublic, UserUpdate
from taskboard.services.credential_store import CredentialStore
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", status_code=201, response_model=UserCreated)
@limiter.limit(RATE_LIMITS["register"])
async def register_user(
    request: Request,
    data: UserCreate,
    credentials: CredentialStore = Depends(get_credential_store)
):
    """Register a user. The response never includes the password."""
    user = await credentials.register(data)
    return UserCreated(user=user)


@router.get("", response_model=List[UserPublic])
async def list_users(credentials: CredentialStore = Depends(get_credential_store)):
    return await credentials.list_users()


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(user_id: str, credentials: CredentialStore = Depends(get_credential_store)):
    return await credentials.get_user(user_id)


@router.put("/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: str,
    changes: UserUpdate,
    credentials: CredentialStore = Depends(get_credential_store)
):
    """Update a user; a new password is re-hashed before storage."""
    return await credentials.update_user(user_id, changes)


@router.delete("/{user_id}")
async def delete_user(user_id: str, credentials: CredentialStore = Depends(get_credential_store)):
    await credentials.delete_user(user_id)
    return {"message": "User deleted"}


@router.get("/{user_id}/tasks", response_model=List[TaskRecord])
async def list_user_tasks(user_id: str, tasks: TaskService = Depends(get_task_service)):
    return await tasks.list_for_user(user_id)
