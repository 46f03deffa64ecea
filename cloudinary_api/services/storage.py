from typing import Final
from urllib.parse import urlsplit

import boto3
from botocore.client import Config

from cloudinary_api.core.config import Settings, get_settings


def split_s3_reference(reference: str) -> tuple[str, str]:
    parts = urlsplit(reference)
    bucket = parts.netloc
    key = parts.path.lstrip("/")
    if parts.scheme != "s3" or not bucket or not key:
        raise ValueError(f"not an s3://bucket/key reference: {reference!r}")
    return bucket, key


class ObjectStoragePresigner:
    """Turns ``s3://bucket/key`` references into presigned HTTPS URLs."""

    scheme: Final[str] = "s3"

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        session = boto3.session.Session()
        self.client = session.client(
            "s3",
            endpoint_url=str(self.settings.s3_endpoint) if self.settings.s3_endpoint else None,
            aws_access_key_id=self.settings.s3_access_key,
            aws_secret_access_key=self.settings.s3_secret_key,
            region_name=self.settings.s3_region,
            config=Config(signature_version="s3v4"),
        )

    def create_presigned_get(self, reference: str, expires_in: int | None = None) -> str:
        bucket, key = split_s3_reference(reference)
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in or self.settings.s3_presigned_ttl,
        )
