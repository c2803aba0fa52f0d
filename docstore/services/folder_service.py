"""Folder service: create, list children and breadcrumbs."""

from typing import List, Optional

from common.constants import ROOT_FOLDER_ID, ROOT_FOLDER_NAME
from common.logging_config import get_logger
from common.types import Actor, AuditTarget
from docstore.context import StorageContext
from docstore.domain import AuditAction, Breadcrumb, Folder, FolderContents, TargetType
from docstore.exceptions import FolderNotFoundError, InternalInconsistencyError, InvalidInputError
from docstore.repositories.file_repository import FileRepository
from docstore.repositories.folder_repository import FolderRepository
from docstore.services.audit_trail import AuditTrail
from docstore.utils import generate_uuid, normalize_folder_id, utc_now

logger = get_logger(__name__)


class FolderService:
    def __init__(self, context: StorageContext):
        self.folder_repo = FolderRepository(context.database)
        self.file_repo = FileRepository(context.database)
        self.audit = AuditTrail(context)

    async def create_folder(self, name: Optional[str], parent_id: Optional[str], actor: Actor) -> Folder:
        """
        Create a folder under parent_id, or under the root when it is None/"root".

        Sibling names are not required to be unique.

        Raises:
            InvalidInputError: If name is empty after trimming
            FolderNotFoundError: If parent_id does not resolve to a folder
        """
        name = (name or "").strip()
        if not name:
            logger.warning(f"Create folder failed: empty name [actor={actor.email}]")
            raise InvalidInputError("Folder name is required")

        parent_id = normalize_folder_id(parent_id)
        if parent_id is not None and self.folder_repo.get_by_id(parent_id) is None:
            logger.warning(f"Create folder failed: unknown parent [parent_id={parent_id}]")
            raise FolderNotFoundError(f"Parent folder {parent_id} not found")

        now = utc_now()
        folder = self.folder_repo.create_folder(Folder(
            folder_id=generate_uuid(),
            name=name,
            parent_id=parent_id,
            created_at=now,
            created_by=actor,
            updated_at=now,
            updated_by=actor,
        ))
        logger.info(f"Created folder '{name}' [folder_id={folder.folder_id}] [parent_id={parent_id}]")

        self.audit.record_action(
            actor,
            AuditAction.CREATE_FOLDER,
            AuditTarget(type=TargetType.FOLDER.value, id=folder.folder_id, name=folder.name),
            from_folder_id=None,
            to_folder_id=parent_id,
        )
        return folder

    async def list_children(self, folder_id: Optional[str]) -> FolderContents:
        """
        List sub-folders and files of a folder, each sorted by name.

        An unknown folder id yields empty lists rather than an error.
        """
        folder_id = normalize_folder_id(folder_id)
        return FolderContents(
            folders=self.folder_repo.list_children(folder_id),
            files=self.file_repo.list_by_folder(folder_id),
        )

    async def breadcrumbs(self, folder_id: Optional[str]) -> List[Breadcrumb]:
        """
        Path from the root to folder_id, root first.

        The walk remembers every folder it visits, so a parent cycle or a
        parent pointer to a missing folder ends in InternalInconsistencyError
        instead of looping.
        """
        root = Breadcrumb(folder_id=ROOT_FOLDER_ID, name=ROOT_FOLDER_NAME)
        folder_id = normalize_folder_id(folder_id)
        if folder_id is None:
            return [root]

        current = self.folder_repo.get_by_id(folder_id)
        chain: List[Breadcrumb] = []
        visited = set()

        while current is not None:
            if current.folder_id in visited:
                logger.error(f"Folder cycle detected while building breadcrumbs [folder_id={folder_id}]")
                raise InternalInconsistencyError(f"Folder cycle detected at {current.folder_id}")
            visited.add(current.folder_id)
            chain.insert(0, Breadcrumb(folder_id=current.folder_id, name=current.name))

            if current.parent_id is None:
                break

            parent = self.folder_repo.get_by_id(current.parent_id)
            if parent is None:
                logger.error(
                    f"Broken parent chain: folder {current.folder_id} points to missing "
                    f"parent {current.parent_id}"
                )
                raise InternalInconsistencyError(
                    f"Folder {current.folder_id} references missing parent {current.parent_id}"
                )
            current = parent

        return [root] + chain
