import logging
import uuid
from typing import Optional

import redis
from fastapi import Depends

from app.database import get_settings
from app.utils.errors import DependencyError
from app.utils.redis_client import get_redis

logger = logging.getLogger(__name__)


class SessionStore:
    """Opaque session tokens kept in Redis under ``<prefix><token>``.

    The expiry is fixed when the token is issued; resolving a token never
    extends it. Expired, revoked and unknown tokens all resolve to None.
    """

    def __init__(self, client: redis.Redis, key_prefix: str = "auth_", ttl_seconds: int = 86400):
        self.client = client
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds

    def _make_key(self, token: str) -> str:
        return f"{self.key_prefix}{token}"

    def issue(self, user_id: int) -> str:
        token = str(uuid.uuid4())
        try:
            self.client.setex(self._make_key(token), self.ttl_seconds, str(user_id))
        except redis.exceptions.RedisError as e:
            logger.error(f"Failed to store session: {e}")
            raise DependencyError() from e
        logger.debug("Issued session %s... for user %s", token[:8], user_id)
        return token

    def resolve(self, token: Optional[str]) -> Optional[int]:
        if not token:
            return None
        try:
            user_id = self.client.get(self._make_key(token))
        except redis.exceptions.RedisError as e:
            logger.error(f"Failed to read session: {e}")
            raise DependencyError() from e
        if user_id is None:
            return None
        return int(user_id)

    def revoke(self, token: Optional[str]) -> bool:
        if not token:
            return False
        try:
            deleted = self.client.delete(self._make_key(token))
        except redis.exceptions.RedisError as e:
            logger.error(f"Failed to delete session: {e}")
            raise DependencyError() from e
        if deleted:
            logger.debug("Revoked session %s...", token[:8])
        return bool(deleted)


def get_session_store(client: redis.Redis = Depends(get_redis)) -> SessionStore:
    settings = get_settings()
    return SessionStore(
        client,
        key_prefix=settings.SESSION_KEY_PREFIX,
        ttl_seconds=settings.SESSION_TTL_SECONDS,
    )
