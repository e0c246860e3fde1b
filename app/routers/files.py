import base64
import binascii
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, StrictBool, StrictInt

from app.models.file import FOLDER
from app.services.file_tree import serialize_file
from app.services.gateway import AccessGateway
from app.utils.auth import get_gateway, token_header
from app.utils.errors import NotFoundError

router = APIRouter(tags=["file"])


class FileUploadRequest(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    isPublic: bool = False
    parentId: Union[StrictInt, StrictBool, str, None] = 0  # bools are kept so they can be refused
    data: Optional[str] = None  # base64 content, required unless type is folder


class FileResponse(BaseModel):
    id: int
    userId: int
    name: str
    type: str
    isPublic: bool
    parentId: int = Field(description="0 for entries at the root")


def decode_data(data: Optional[str]) -> Optional[bytes]:
    """Empty or undecodable payloads count as missing."""
    if not data:
        return None
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None


def parse_page(page: Optional[str]) -> int:
    try:
        return int(page) if page is not None else 0
    except ValueError:
        return 0


@router.post('/files', status_code=201, response_model=FileResponse)
def upload_file(
    body: FileUploadRequest,
    token: Optional[str] = Depends(token_header),
    gateway: AccessGateway = Depends(get_gateway),
):
    content = decode_data(body.data) if body.type != FOLDER else None
    file = gateway.create(
        token,
        name=body.name,
        type=body.type,
        is_public=body.isPublic,
        parent_id=body.parentId,
        content=content,
    )
    return serialize_file(file)


@router.get('/files/{file_id}', response_model=FileResponse)
def show_file(
    file_id: int,
    token: Optional[str] = Depends(token_header),
    gateway: AccessGateway = Depends(get_gateway),
):
    return serialize_file(gateway.get(token, file_id))


@router.get('/files', response_model=List[FileResponse])
def read_user_files(
    parentId: Optional[str] = '0',
    page: Optional[str] = '0',
    token: Optional[str] = Depends(token_header),
    gateway: AccessGateway = Depends(get_gateway),
):
    files = gateway.list(token, parentId, parse_page(page))
    return [serialize_file(file) for file in files]


@router.get('/files/{file_id}/data')
def read_file_data(
    file_id: int,
    size: Optional[str] = None,
    token: Optional[str] = Depends(token_header),
    gateway: AccessGateway = Depends(get_gateway),
):
    if size is not None:
        try:
            size = int(size)
        except ValueError:
            raise NotFoundError()
    content, mime_type = gateway.read_content(token, file_id, size)
    return Response(content=content, media_type=mime_type)
