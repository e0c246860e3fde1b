from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)


    #relationships
    files = relationship("File", back_populates="owner")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
