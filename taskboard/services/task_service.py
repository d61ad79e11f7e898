# taskboard/services/task_service.py
"""
Task CRUD.

Tasks reference a directory and an owning user by id. The owner is
always the authenticated caller that created the task.
"""
import logging
from typing import List

from taskboard.core.exceptions import not_found
from taskboard.models.auth import Identity
from taskboard.models.directory import DirectoryRecord
from taskboard.models.task import TaskCreate, TaskDetail, TaskRecord, TaskUpdate
from taskboard.models.user import UserPublic, UserRecord
from taskboard.services.repositories import DocumentRepository

logger = logging.getLogger(__name__)


class TaskService:

    def __init__(
        self,
        tasks: DocumentRepository,
        directories: DocumentRepository,
        users: DocumentRepository
    ):
        self.tasks = tasks
        self.directories = directories
        self.users = users

    async def create(self, data: TaskCreate, owner: Identity) -> TaskRecord:
        """Store a new task owned by ``owner``"""
        document = data.model_dump(by_alias=True)
        document["userId"] = owner.user_id
        created = await self.tasks.create(document)
        logger.info(f"Created task {created['_id']} for user {owner.user_id}")
        return TaskRecord.model_validate(created)

    async def list_detailed(self) -> List[TaskDetail]:
        """
        All tasks with their directory and owner resolved.

        References that no longer resolve are left as None.
        """
        documents = await self.tasks.find_many()
        directories = {
            d["_id"]: DirectoryRecord.model_validate(d)
            for d in await self.directories.find_by_ids(doc["dirId"] for doc in documents)
        }
        owners = {
            u["_id"]: UserPublic.from_record(UserRecord.model_validate(u))
            for u in await self.users.find_by_ids(doc["userId"] for doc in documents)
        }
        return [
            TaskDetail.model_validate({
                **doc,
                "directory": directories.get(doc["dirId"]),
                "user": owners.get(doc["userId"]),
            })
            for doc in documents
        ]

    async def list_for_user(self, user_id: str) -> List[TaskRecord]:
        return [TaskRecord.model_validate(d) for d in await self.tasks.find_many({"userId": user_id})]

    async def list_for_directory(self, directory_id: str) -> List[TaskRecord]:
        return [TaskRecord.model_validate(d) for d in await self.tasks.find_many({"dirId": directory_id})]

    async def get(self, task_id: str) -> TaskRecord:
        document = await self.tasks.find_by_id(task_id)
        if document is None:
            raise not_found("task", task_id)
        return TaskRecord.model_validate(document)

    async def update(self, task_id: str, changes: TaskUpdate) -> TaskRecord:
        """Apply the supplied fields; an explicit null clears optional ones"""
        fields = changes.model_dump(by_alias=True, exclude_unset=True)
        for required in ("title", "dirId", "completed", "important"):
            if required in fields and fields[required] is None:
                del fields[required]
        document = await self.tasks.update_by_id(task_id, fields)
        if document is None:
            raise not_found("task", task_id)
        return TaskRecord.model_validate(document)

    async def delete(self, task_id: str) -> None:
        if not await self.tasks.delete_by_id(task_id):
            raise not_found("task", task_id)
        logger.info(f"Deleted task {task_id}")
