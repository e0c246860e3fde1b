from app.database import Base




from app.models.user import User
from app.models.file import File
