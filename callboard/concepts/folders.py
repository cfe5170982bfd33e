"""Practice and repertoire folders.

Every user has at most one practice folder, limited to the capacity held in
the shared ``FolderSettings``. Repertoire folders are unlimited, named and
only ever touched by their owner.
"""

from uuid import UUID

from sqlalchemy import delete, select

from callboard.concepts.base import BaseConcept, to_uuids
from callboard.config import FolderSettings
from callboard.exceptions import (
    EmptyFolderNameError,
    HasPracticeFolderError,
    InvalidCapacityError,
    NoPracticeFolderError,
    NotFolderOwnerError,
    NotInFolderError,
    PracticeFolderFullError,
    RepertoireNotFoundError,
)
from callboard.logging_config import get_logger
from callboard.models import PracticeFolder, RepertoireFolder

logger = get_logger(__name__)

PRACTICE_FOLDER_NAME = "Practice Folder"


def _without(contents: list[str], item: UUID) -> list[str]:
    """Drop the first occurrence of ``item``, failing if it is absent."""
    remaining = list(contents)
    try:
        remaining.remove(str(item))
    except ValueError:
        raise NotInFolderError(item)
    return remaining


class FolderConcept(BaseConcept):

    def __init__(self, session, settings: FolderSettings | None = None):
        super().__init__(session)
        self.settings = settings or FolderSettings()

    # ==========================================
    # CAPACITY
    # ==========================================

    @property
    def capacity(self) -> int:
        return self.settings.capacity

    def change_capacity(self, capacity: int) -> int:
        if capacity < 0:
            raise InvalidCapacityError(capacity)
        self.settings.capacity = capacity
        logger.info("practice_capacity_changed", capacity=capacity)
        return capacity

    # ==========================================
    # PRACTICE
    # ==========================================

    async def create_practice(self, user: UUID) -> PracticeFolder:
        if await self._find_practice(user) is not None:
            raise HasPracticeFolderError(user)
        folder = await self._create(
            PracticeFolder, user=user, name=PRACTICE_FOLDER_NAME, contents=[], num_contents=0
        )
        logger.info("practice_folder_created", user=str(user))
        return folder

    async def get_practice(self, user: UUID) -> PracticeFolder:
        folder = await self._find_practice(user)
        if folder is None:
            raise NoPracticeFolderError(user)
        return folder

    async def add_practice(self, user: UUID, item: UUID) -> PracticeFolder:
        folder = await self.get_practice(user)
        if folder.num_contents + 1 > self.capacity:
            raise PracticeFolderFullError(self.capacity)
        folder.contents = [*folder.contents, str(item)]
        folder.num_contents += 1
        await self.session.flush()
        logger.info("practice_item_added", user=str(user), item=str(item))
        return folder

    async def remove_practice(self, user: UUID, item: UUID) -> PracticeFolder:
        folder = await self.get_practice(user)
        folder.contents = _without(folder.contents, item)
        folder.num_contents -= 1
        await self.session.flush()
        logger.info("practice_item_removed", user=str(user), item=str(item))
        return folder

    # ==========================================
    # REPERTOIRE
    # ==========================================

    async def create_repertoire(self, user: UUID, name: str) -> RepertoireFolder:
        if not name:
            raise EmptyFolderNameError()
        folder = await self._create(RepertoireFolder, user=user, name=name, contents=[])
        logger.info("repertoire_folder_created", user=str(user), folder=str(folder.id))
        return folder

    async def get_repertoire(self, folder_id: UUID) -> RepertoireFolder:
        folder = await self.session.get(RepertoireFolder, folder_id)
        if folder is None:
            raise RepertoireNotFoundError(folder_id)
        return folder

    async def get_user_repertoire(self, user: UUID) -> list[RepertoireFolder]:
        return await self._all(
            select(RepertoireFolder)
            .where(RepertoireFolder.user == user)
            .order_by(RepertoireFolder.created_at)
        )

    async def add_repertoire(self, user: UUID, folder_id: UUID, item: UUID) -> RepertoireFolder:
        folder = await self._owned_repertoire(user, folder_id)
        folder.contents = [*folder.contents, str(item)]
        await self.session.flush()
        logger.info("repertoire_item_added", folder=str(folder_id), item=str(item))
        return folder

    async def remove_repertoire(self, user: UUID, folder_id: UUID, item: UUID) -> RepertoireFolder:
        folder = await self._owned_repertoire(user, folder_id)
        folder.contents = _without(folder.contents, item)
        await self.session.flush()
        logger.info("repertoire_item_removed", folder=str(folder_id), item=str(item))
        return folder

    async def delete_repertoire(self, user: UUID, folder_id: UUID) -> list[UUID]:
        folder = await self._owned_repertoire(user, folder_id)
        contents = to_uuids(folder.contents)
        await self._delete(folder)
        logger.info("repertoire_folder_deleted", folder=str(folder_id))
        return contents

    async def delete_user(self, user: UUID) -> list[UUID]:
        """Delete every folder of ``user``, returning the items they held."""
        contents: list[UUID] = []
        practice = await self._find_practice(user)
        if practice is not None:
            contents.extend(to_uuids(practice.contents))
        for folder in await self.get_user_repertoire(user):
            contents.extend(to_uuids(folder.contents))

        await self.session.execute(delete(PracticeFolder).where(PracticeFolder.user == user))
        await self.session.execute(delete(RepertoireFolder).where(RepertoireFolder.user == user))
        await self.session.flush()
        logger.info("folders_deleted_for_user", user=str(user), items=len(contents))
        return contents

    async def _find_practice(self, user: UUID) -> PracticeFolder | None:
        return await self._first(select(PracticeFolder).where(PracticeFolder.user == user))

    async def _owned_repertoire(self, user: UUID, folder_id: UUID) -> RepertoireFolder:
        folder = await self.get_repertoire(folder_id)
        if folder.user != user:
            raise NotFolderOwnerError(user)
        return folder
