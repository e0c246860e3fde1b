from fastapi.security import APIKeyHeader
from fastapi import Depends
from sqlalchemy.orm import Session
from app.database import get_db, get_settings
from app.jobs.dispatcher import JobDispatcher, get_job_dispatcher
from app.models.models import User
from app.services.file_tree import FileTreeManager
from app.services.gateway import AccessGateway
from app.storage.blob import get_blob_store
from app.utils.errors import Unauthorized
from app.utils.sessions import SessionStore, get_session_store


token_header = APIKeyHeader(name="X-Token", auto_error=False)

def get_user(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()

def get_file_tree(
    db: Session = Depends(get_db),
    blob_store = Depends(get_blob_store),
    dispatcher: JobDispatcher = Depends(get_job_dispatcher),
) -> FileTreeManager:
    return FileTreeManager(db, blob_store, dispatcher, page_size=get_settings().PAGE_SIZE)

def get_gateway(
    sessions: SessionStore = Depends(get_session_store),
    file_tree: FileTreeManager = Depends(get_file_tree),
) -> AccessGateway:
    return AccessGateway(sessions, file_tree)

def auth_dependency(
    token: str | None = Depends(token_header),
    sessions: SessionStore = Depends(get_session_store),
    db: Session = Depends(get_db)
):
    user_id = sessions.resolve(token)
    if user_id is None:
        raise Unauthorized()
    user = get_user(db, user_id)
    if not user:
        raise Unauthorized()
    return user
