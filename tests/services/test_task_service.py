# tests/services/test_task_service.py
import pytest

from taskboard.core.exceptions import NotFoundError
from taskboard.models.auth import Identity
from taskboard.models.directory import DirectoryCreate
from taskboard.models.task import TaskCreate, TaskUpdate
from taskboard.models.user import UserCreate
from taskboard.services.directory_service import DirectoryService
from taskboard.services.task_service import TaskService


@pytest.fixture
def task_service(tasks_repo, directories_repo, users_repo):
    return TaskService(tasks_repo, directories_repo, users_repo)


@pytest.fixture
async def owner(credential_store):
    user = await credential_store.register(UserCreate(username="alice", email="a@x.com", password="pw1"))
    return Identity(user_id=user.id)


@pytest.fixture
async def inbox(directories_repo):
    return await DirectoryService(directories_repo).create(DirectoryCreate(name="Inbox"))


def new_task(directory_id: str, **fields) -> TaskCreate:
    return TaskCreate(**{"title": "Write report", "dirId": directory_id, **fields})


class TestCreate:

    async def test_owner_is_stamped(self, task_service, owner, inbox):
        task = await task_service.create(new_task(inbox.id), owner)

        assert task.user_id == owner.user_id
        assert task.dir_id == inbox.id
        assert task.completed is False
        assert task.important is False

    async def test_stored_with_wire_names(self, task_service, tasks_repo, owner, inbox):
        task = await task_service.create(new_task(inbox.id, important=True), owner)

        stored = tasks_repo.documents[task.id]
        assert stored["dirId"] == inbox.id
        assert stored["userId"] == owner.user_id
        assert stored["important"] is True


class TestListing:

    async def test_detailed_resolves_references(self, task_service, owner, inbox):
        await task_service.create(new_task(inbox.id), owner)

        [detail] = await task_service.list_detailed()

        assert detail.directory.name == "Inbox"
        assert detail.user.username == "alice"
        assert "password" not in detail.model_dump(by_alias=True)["user"]

    async def test_detailed_tolerates_dangling_references(self, task_service, owner, inbox, directories_repo):
        await task_service.create(new_task(inbox.id), owner)
        await directories_repo.delete_by_id(inbox.id)

        [detail] = await task_service.list_detailed()

        assert detail.directory is None
        assert detail.user is not None

    async def test_detailed_empty(self, task_service):
        assert await task_service.list_detailed() == []

    async def test_filters(self, task_service, owner, inbox, directories_repo):
        other = await DirectoryService(directories_repo).create(DirectoryCreate(name="Later"))
        await task_service.create(new_task(inbox.id), owner)
        await task_service.create(new_task(other.id, title="Read"), owner)

        assert len(await task_service.list_for_user(owner.user_id)) == 2
        assert [t.title for t in await task_service.list_for_directory(other.id)] == ["Read"]
        assert await task_service.list_for_user("652f1c2e9b1e8a3d4c5b6a79") == []


class TestUpdateAndDelete:

    async def test_partial_update(self, task_service, owner, inbox):
        task = await task_service.create(new_task(inbox.id, description="draft"), owner)

        updated = await task_service.update(task.id, TaskUpdate(completed=True))

        assert updated.completed is True
        assert updated.title == "Write report"
        assert updated.description == "draft"

    async def test_null_clears_optional_but_not_required(self, task_service, owner, inbox):
        task = await task_service.create(new_task(inbox.id, description="draft"), owner)

        updated = await task_service.update(task.id, TaskUpdate(description=None, title=None))

        assert updated.description is None
        assert updated.title == "Write report"

    async def test_update_missing(self, task_service):
        with pytest.raises(NotFoundError):
            await task_service.update("652f1c2e9b1e8a3d4c5b6a79", TaskUpdate(completed=True))

    async def test_delete(self, task_service, owner, inbox):
        task = await task_service.create(new_task(inbox.id), owner)

        await task_service.delete(task.id)

        with pytest.raises(NotFoundError):
            await task_service.get(task.id)
        with pytest.raises(NotFoundError):
            await task_service.delete(task.id)
