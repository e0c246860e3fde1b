"""Folder/file/image metadata: creation, ownership-scoped lookup and paged listing.

The manager never touches bytes itself. Non-folder content goes to the blob
store first and only then is the metadata row committed, so a crash in
between leaves an orphaned blob and never a row pointing at missing bytes.
"""
import logging
from typing import List, Optional, Union

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.jobs.dispatcher import JobDispatcher
from app.models.file import FILE_TYPES, FOLDER, IMAGE
from app.models.models import File
from app.utils.errors import DependencyError, ParentNotFoundError, ValidationError

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


class RootParent:
    """The parent of top-level entries. Shown to clients as ``0``."""

    value = 0

    def __repr__(self):
        return "ROOT_PARENT"


ROOT_PARENT = RootParent()

ParentRef = Union[RootParent, int]


def parse_parent_id(raw) -> ParentRef:
    """Read a client supplied parent id; 0, "0" and None all mean the root."""
    if isinstance(raw, bool):
        raise ParentNotFoundError()
    if raw is ROOT_PARENT or raw is None or raw == 0 or raw == "0":
        return ROOT_PARENT
    try:
        parent_id = int(raw)
    except (TypeError, ValueError):
        raise ParentNotFoundError()
    if parent_id <= 0:
        raise ParentNotFoundError()
    return parent_id


def serialize_file(file: File) -> dict:
    return {
        "id": file.id,
        "userId": file.owner_id,
        "name": file.name,
        "type": file.type,
        "isPublic": file.is_public,
        "parentId": file.parent_id if file.parent_id is not None else ROOT_PARENT.value,
    }


class FileTreeManager:
    def __init__(self, db: Session, blob_store, dispatcher: JobDispatcher, page_size: int = PAGE_SIZE):
        self.db = db
        self.blob_store = blob_store
        self.dispatcher = dispatcher
        self.page_size = page_size

    def _find_owned(self, owner_id: int, file_id: int) -> Optional[File]:
        try:
            return (
                self.db.query(File)
                .filter(File.id == file_id, File.owner_id == owner_id)
                .first()
            )
        except OperationalError as e:
            logger.error(f"Database unavailable: {e}")
            raise DependencyError() from e

    def create(
        self,
        owner_id: int,
        name: Optional[str],
        type: Optional[str],
        is_public: bool = False,
        parent_id: ParentRef = ROOT_PARENT,
        content: Optional[bytes] = None,
    ) -> File:
        if not name:
            raise ValidationError("Missing name")
        if type not in FILE_TYPES:
            raise ValidationError("Missing type")
        if type != FOLDER and content is None:
            raise ValidationError("Missing data")

        if parent_id is not ROOT_PARENT:
            parent = self._find_owned(owner_id, parent_id)
            if parent is None:
                raise ParentNotFoundError()
            if not parent.is_folder:
                raise ValidationError("Parent is not a folder")

        local_path = None
        if type != FOLDER:
            local_path = self.blob_store.put(content)

        file = File(
            owner_id=owner_id,
            name=name,
            type=type,
            is_public=bool(is_public),
            parent_id=None if parent_id is ROOT_PARENT else parent_id,
            local_path=local_path,
        )
        try:
            self.db.add(file)
            self.db.commit()
            self.db.refresh(file)
        except OperationalError as e:
            self.db.rollback()
            logger.error(f"Database unavailable: {e}")
            raise DependencyError() from e
        logger.info("Created %s %s for user %s", type, file.id, owner_id)

        if type == IMAGE:
            self.dispatcher.enqueue(owner_id, file.id, local_path)
        return file

    def get_by_id(self, owner_id: int, file_id: int) -> Optional[File]:
        return self._find_owned(owner_id, file_id)

    def get_public(self, file_id: int) -> Optional[File]:
        try:
            return (
                self.db.query(File)
                .filter(File.id == file_id, File.is_public.is_(True))
                .first()
            )
        except OperationalError as e:
            logger.error(f"Database unavailable: {e}")
            raise DependencyError() from e

    def list(self, owner_id: int, parent_id: ParentRef = ROOT_PARENT, page: int = 0) -> List[File]:
        if page < 0:
            return []
        query = self.db.query(File).filter(File.owner_id == owner_id)
        if parent_id is ROOT_PARENT:
            query = query.filter(File.parent_id.is_(None))
        else:
            query = query.filter(File.parent_id == parent_id)
        try:
            return (
                query.order_by(File.id)
                .offset(page * self.page_size)
                .limit(self.page_size)
                .all()
            )
        except OperationalError as e:
            logger.error(f"Database unavailable: {e}")
            raise DependencyError() from e
