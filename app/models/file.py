from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base

FOLDER = "folder"
FILE = "file"
IMAGE = "image"
FILE_TYPES = (FOLDER, FILE, IMAGE)


class File(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String(16), nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)
    # NULL means the root folder, see app.services.file_tree.ROOT_PARENT
    parent_id = Column(Integer, ForeignKey("files.id"), nullable=True, index=True)
    local_path = Column(String, nullable=True)  # blob store reference, never set on folders

    owner = relationship("User", back_populates="files")

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER

    def __repr__(self):
        return f"<File(id={self.id}, name={self.name}, type={self.type})>"
