import logging

import redis
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from app.database import db_dependency
from app.models.models import File, User
from app.utils.errors import DependencyError
from app.utils.redis_client import get_redis, is_alive

logger = logging.getLogger(__name__)

router = APIRouter(tags=["status"])


@router.get('/status')
def get_status(db: db_dependency, client: redis.Redis = Depends(get_redis)):
    try:
        db.execute(text("SELECT 1"))
        db_alive = True
    except OperationalError as e:
        logger.error(f"Database ping failed: {e}")
        db_alive = False
    return {"redis": is_alive(client), "db": db_alive}


@router.get('/stats')
def get_stats(db: db_dependency):
    try:
        return {"users": db.query(User).count(), "files": db.query(File).count()}
    except OperationalError as e:
        logger.error(f"Database unavailable: {e}")
        raise DependencyError() from e
