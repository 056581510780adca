"""
Object Store Gateway
Moves medical file bytes to and from S3 and mints presigned read links.

Every call is a single attempt: botocore retries are disabled and the
connect/read timeouts come from configuration, so failures surface to the
caller immediately.
"""
import logging
import uuid
from datetime import timedelta
from typing import Optional, Union
from urllib.parse import quote

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from doktolib.errors import (
    DeleteFailed,
    LinkGenerationFailed,
    StorageUnavailable,
    UploadFailed,
)
from doktolib.services.file_classifier import FileCategory, file_extension

logger = logging.getLogger(__name__)

KEY_PREFIX = 'medical-files'


def build_storage_key(category: FileCategory, owner_id: str, filename: str) -> str:
    """medical-files/{category}/{owner_id}/{unique token}{extension}"""
    return f"{KEY_PREFIX}/{FileCategory(category).value}/{owner_id}/{uuid.uuid4()}{file_extension(filename)}"


def object_metadata(owner_id: str, category: FileCategory, filename: str) -> dict:
    """S3 user metadata for an upload. Values are percent-encoded, S3 only accepts ASCII headers."""
    return {
        'patient-id': quote(owner_id, safe=''),
        'category': FileCategory(category).value,
        'original-name': quote(filename, safe=''),
    }


def build_s3_client(region, access_key, secret_key, connect_timeout=5, read_timeout=30):
    """S3 client with SigV4 presigning, bounded timeouts and a single attempt per call."""
    return boto3.client(
        's3',
        region_name=region,
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        config=BotoConfig(
            signature_version='s3v4',
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={'total_max_attempts': 1},
        ),
    )


class ObjectStore:
    """
    S3-backed gateway. Constructed once per application and shared by all
    requests (boto3 clients are thread-safe).

    An ObjectStore without a client is "unconfigured": every operation raises
    StorageUnavailable and the rest of the API keeps working.
    """

    def __init__(self, client=None, bucket: Optional[str] = None):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_config(cls, config) -> 'ObjectStore':
        """Build the gateway from Flask config, unconfigured if credentials or bucket are missing."""
        access_key = config.get('AWS_ACCESS_KEY_ID')
        secret_key = config.get('AWS_SECRET_ACCESS_KEY')
        bucket = config.get('AWS_S3_BUCKET')
        region = config.get('AWS_REGION', 'us-east-1')

        if not access_key or not secret_key:
            logger.warning("AWS credentials not found. S3 file upload will not work.")
            return cls()
        if not bucket:
            logger.warning("AWS_S3_BUCKET is not set. S3 file upload will not work.")
            return cls()

        client = build_s3_client(
            region,
            access_key,
            secret_key,
            connect_timeout=config.get('S3_CONNECT_TIMEOUT', 5),
            read_timeout=config.get('S3_READ_TIMEOUT', 30),
        )
        logger.info("Successfully initialized S3 client for region: %s", region)
        return cls(client=client, bucket=bucket)

    @property
    def configured(self) -> bool:
        return self.client is not None and bool(self.bucket)

    def _require_client(self):
        if not self.configured:
            raise StorageUnavailable()
        return self.client

    def upload(self, data: bytes, filename: str, content_type: str,
               owner_id: str, category: FileCategory) -> str:
        """
        Store data under a fresh storage key and return the key.

        Raises:
            StorageUnavailable: gateway not configured
            UploadFailed: S3 rejected the request or the transport failed
        """
        client = self._require_client()
        category = FileCategory(category)
        key = build_storage_key(category, owner_id, filename)

        try:
            client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ContentLength=len(data),
                ServerSideEncryption='AES256',
                Metadata=object_metadata(owner_id, category, filename),
            )
        except (BotoCoreError, ClientError) as e:
            raise UploadFailed() from e

        logger.info("Uploaded %s (%d bytes) to s3://%s/%s", filename, len(data), self.bucket, key)
        return key

    def generate_temporary_link(self, key: str, ttl: Union[int, timedelta] = 3600) -> str:
        """
        Presigned GET URL for key, valid for ttl (seconds or timedelta).

        Raises:
            StorageUnavailable: gateway not configured
            LinkGenerationFailed: signing failed
        """
        client = self._require_client()
        if isinstance(ttl, timedelta):
            ttl = int(ttl.total_seconds())

        try:
            return client.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket, 'Key': key},
                ExpiresIn=ttl,
            )
        except (BotoCoreError, ClientError) as e:
            raise LinkGenerationFailed() from e

    def delete(self, key: str) -> None:
        """
        Remove the object stored under key.

        Raises:
            StorageUnavailable: gateway not configured
            DeleteFailed: S3 rejected the request or the transport failed
        """
        client = self._require_client()
        try:
            client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise DeleteFailed() from e
        logger.info("Deleted s3://%s/%s", self.bucket, key)
