from fastapi import APIRouter, Depends, Response
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel

from app.database import db_dependency
from app.utils.auth import token_header
from app.utils.encrypt import verify_credentials
from app.utils.errors import Unauthorized
from app.utils.sessions import SessionStore, get_session_store

router = APIRouter(tags=["auth"])

basic_auth = HTTPBasic(auto_error=False)


class TokenResponse(BaseModel):
    token: str


@router.get('/connect', response_model=TokenResponse,
            responses={401: {'description': 'Missing or incorrect credentials'}})
def connect(
    db: db_dependency,
    credentials: HTTPBasicCredentials | None = Depends(basic_auth),
    sessions: SessionStore = Depends(get_session_store),
):
    if credentials is None:
        raise Unauthorized()
    user = verify_credentials(db, credentials.username, credentials.password)
    if user is None:
        raise Unauthorized()
    return {'token': sessions.issue(user.id)}


@router.get('/disconnect', status_code=204)
def disconnect(
    token: str | None = Depends(token_header),
    sessions: SessionStore = Depends(get_session_store),
):
    if not sessions.revoke(token):
        raise Unauthorized()
    return Response(status_code=204)
