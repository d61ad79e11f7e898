# taskboard/services/directory_service.py
import logging
from typing import List

from taskboard.core.exceptions import not_found
from taskboard.models.directory import DirectoryCreate, DirectoryRecord, DirectoryUpdate
from taskboard.services.repositories import DocumentRepository

logger = logging.getLogger(__name__)


class DirectoryService:
    """CRUD for directories. Deleting a directory leaves its tasks in place."""

    def __init__(self, directories: DocumentRepository):
        self.directories = directories

    async def create(self, data: DirectoryCreate) -> DirectoryRecord:
        document = await self.directories.create(data.model_dump())
        logger.info(f"Created directory {document['_id']}")
        return DirectoryRecord.model_validate(document)

    async def list(self) -> List[DirectoryRecord]:
        return [DirectoryRecord.model_validate(d) for d in await self.directories.find_many()]

    async def get(self, directory_id: str) -> DirectoryRecord:
        document = await self.directories.find_by_id(directory_id)
        if document is None:
            raise not_found("directory", directory_id)
        return DirectoryRecord.model_validate(document)

    async def update(self, directory_id: str, changes: DirectoryUpdate) -> DirectoryRecord:
        document = await self.directories.update_by_id(
            directory_id, changes.model_dump(exclude_unset=True, exclude_none=True)
        )
        if document is None:
            raise not_found("directory", directory_id)
        return DirectoryRecord.model_validate(document)

    async def delete(self, directory_id: str) -> None:
        if not await self.directories.delete_by_id(directory_id):
            raise not_found("directory", directory_id)
        logger.info(f"Deleted directory {directory_id}")
