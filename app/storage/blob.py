import logging
import os
import uuid
from functools import lru_cache

import boto3
from botocore.exceptions import ClientError

from app.database import DEBUG, get_settings
from app.utils.errors import DependencyError, NotFoundError

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Blobs written to a local folder, one uuid-named file each."""

    def __init__(self, folder_path: str):
        self.folder_path = folder_path

    def put(self, content: bytes) -> str:
        try:
            os.makedirs(self.folder_path, exist_ok=True)
            local_path = os.path.join(self.folder_path, str(uuid.uuid4()))
            with open(local_path, "wb") as file_object:
                file_object.write(content)
        except OSError as e:
            logger.error(f"Error writing blob to {self.folder_path}: {e}")
            raise DependencyError("Failed to store file") from e
        logger.debug("Stored %d bytes at %s", len(content), local_path)
        return local_path

    def get(self, path: str) -> bytes:
        if not os.path.isfile(path):
            raise NotFoundError()
        try:
            with open(path, "rb") as file_object:
                return file_object.read()
        except OSError as e:
            logger.error(f"Error reading blob {path}: {e}")
            raise DependencyError("Failed to read file") from e


class S3BlobStore:
    """Blobs kept in an S3 bucket; paths take the form ``s3://<bucket>/<key>``."""

    def __init__(self, s3_client, bucket: str):
        self.s3_client = s3_client
        self.bucket = bucket

    def _key(self, path: str) -> str:
        prefix = f"s3://{self.bucket}/"
        if not path.startswith(prefix):
            raise NotFoundError()
        return path[len(prefix):]

    def put(self, content: bytes) -> str:
        object_name = str(uuid.uuid4())
        try:
            self.s3_client.put_object(Body=content, Bucket=self.bucket, Key=object_name)
        except ClientError as e:
            logger.error(f"Error uploading file to S3: {e}")
            raise DependencyError("Failed to upload file to S3") from e
        return f"s3://{self.bucket}/{object_name}"

    def get(self, path: str) -> bytes:
        try:
            obj = self.s3_client.get_object(Bucket=self.bucket, Key=self._key(path))
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise NotFoundError() from e
            logger.error(f"Error fetching file from S3: {e}")
            raise DependencyError("Failed to fetch file from S3") from e
        return obj["Body"].read()


@lru_cache
def get_blob_store():
    settings = get_settings()
    if DEBUG:
        return LocalBlobStore(settings.FOLDER_PATH)
    s3_client = boto3.client(
        's3',
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_REGION,
    )
    return S3BlobStore(s3_client, settings.S3_BUCKET_NAME)
