"""Single enforcement point for authentication on file operations.

Routers hand over the raw ``X-Token`` value; nothing downstream of the
gateway ever sees a caller supplied user id.
"""
import logging
import mimetypes
from typing import List, Optional, Tuple

from app.models.file import FILE, IMAGE
from app.models.models import File
from app.services.file_tree import ROOT_PARENT, FileTreeManager, parse_parent_id
from app.utils.errors import NotFoundError, ParentNotFoundError, Unauthorized, ValidationError
from app.utils.sessions import SessionStore

logger = logging.getLogger(__name__)

THUMBNAIL_SIZES = (500, 250, 100)


class AccessGateway:
    def __init__(self, sessions: SessionStore, file_tree: FileTreeManager):
        self.sessions = sessions
        self.file_tree = file_tree

    def authenticate(self, token: Optional[str]) -> int:
        user_id = self.sessions.resolve(token)
        if user_id is None:
            raise Unauthorized()
        return user_id

    def create(
        self,
        token: Optional[str],
        name: Optional[str],
        type: Optional[str],
        is_public: bool = False,
        parent_id=ROOT_PARENT,
        content: Optional[bytes] = None,
    ) -> File:
        """Create an entry; ``parent_id`` may be a raw client value, it is read after authentication."""
        owner_id = self.authenticate(token)
        return self.file_tree.create(owner_id, name, type, is_public, parse_parent_id(parent_id), content)

    def get(self, token: Optional[str], file_id: int) -> File:
        owner_id = self.authenticate(token)
        file = self.file_tree.get_by_id(owner_id, file_id)
        if file is None:
            raise NotFoundError()
        return file

    def list(self, token: Optional[str], parent_id=ROOT_PARENT, page: int = 0) -> List[File]:
        owner_id = self.authenticate(token)
        try:
            parent = parse_parent_id(parent_id)
        except ParentNotFoundError:
            return []
        return self.file_tree.list(owner_id, parent, page)

    def read_content(self, token: Optional[str], file_id: int, size: Optional[int] = None) -> Tuple[bytes, str]:
        """Bytes and MIME type of a file, or of one of its thumbnails.

        Public files need no session. Private ones are only served to their
        owner, and look absent to everybody else.
        """
        file = self.file_tree.get_public(file_id)
        if file is None:
            owner_id = self.sessions.resolve(token)
            if owner_id is not None:
                file = self.file_tree.get_by_id(owner_id, file_id)
        if file is None:
            raise NotFoundError()
        if file.type not in (FILE, IMAGE):
            raise ValidationError("A folder doesn't have content")

        path = file.local_path
        if size is not None:
            if size not in THUMBNAIL_SIZES:
                raise NotFoundError()
            path = f"{path}_{size}"
        content = self.file_tree.blob_store.get(path)
        mime_type, _ = mimetypes.guess_type(file.name)
        return content, mime_type or "application/octet-stream"
