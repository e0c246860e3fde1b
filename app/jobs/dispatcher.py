import json
import logging
from functools import lru_cache

import redis

from app.database import get_settings
from app.utils.redis_client import get_redis

logger = logging.getLogger(__name__)


class JobDispatcher:
    """Pushes thumbnail jobs onto a Redis list read by the image worker.

    One dispatcher lives for the whole process. Delivery is at most once:
    a failed push is logged and dropped, the worker owns its own retries.
    """

    def __init__(self, client: redis.Redis, queue_name: str = "fileQueue"):
        self.client = client
        self.queue_name = queue_name

    def enqueue(self, user_id: int, file_id: int, local_path: str) -> None:
        payload = json.dumps({"userId": user_id, "fileId": file_id, "localPath": local_path})
        try:
            self.client.rpush(self.queue_name, payload)
        except Exception:
            logger.exception("Could not enqueue thumbnail job for file %s", file_id)
            return
        logger.info("Enqueued thumbnail job for file %s", file_id)


@lru_cache
def get_job_dispatcher() -> JobDispatcher:
    return JobDispatcher(get_redis(), queue_name=get_settings().FILE_QUEUE_NAME)
