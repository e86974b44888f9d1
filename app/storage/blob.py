from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlparse

import boto3
from botocore.client import Config

from app.core.config import settings
from app.core.errors import ValidationError
from app.storage.keys import ext_from_content_type, item_image_key


@dataclass
class StoredObject:
    key: str
    url: str


def storage_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.STORAGE_ENDPOINT or None,
        aws_access_key_id=settings.STORAGE_ACCESS_KEY_ID,
        aws_secret_access_key=settings.STORAGE_SECRET_ACCESS_KEY,
        region_name=settings.STORAGE_REGION,
        config=Config(signature_version="s3v4"),
    )


def object_url(key: str) -> str:
    base = settings.STORAGE_PUBLIC_BASE.rstrip("/")
    if base:
        return f"{base}/{key}"
    return f"{settings.STORAGE_ENDPOINT.rstrip('/')}/{settings.STORAGE_BUCKET}/{key}"


def signed_url(key: str, expires: Optional[int] = None, client=None) -> str:
    s3 = client or storage_client()
    return s3.generate_presigned_url(
        "get_object",
        Params={"Bucket": settings.STORAGE_BUCKET, "Key": key},
        ExpiresIn=expires or settings.STORAGE_SIGNED_URL_TTL_S,
    )


def key_from_url(url: Optional[str]) -> Optional[str]:
    """Recover the object key from a stored public or endpoint URL."""
    if not url:
        return None
    base = settings.STORAGE_PUBLIC_BASE.rstrip("/")
    if base and url.startswith(base + "/"):
        return unquote(url[len(base) + 1:].split("?", 1)[0]) or None
    path = urlparse(url).path
    marker = f"/{settings.STORAGE_BUCKET}/"
    if marker not in path:
        return None
    return unquote(path.split(marker, 1)[1]) or None


def validate_upload(data: bytes, content_type: Optional[str]) -> str:
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError("File must be an image", [{"field": "file", "message": "File must be an image"}])
    if len(data) > settings.UPLOAD_MAX_BYTES:
        limit_mb = settings.UPLOAD_MAX_BYTES // (1024 * 1024)
        raise ValidationError(
            f"Image must be smaller than {limit_mb}MB",
            [{"field": "file", "message": f"Image must be smaller than {limit_mb}MB"}],
        )
    if not data:
        raise ValidationError("Empty upload", [{"field": "file", "message": "File is empty"}])
    return content_type


def upload_image(user_id: str, data: bytes, content_type: Optional[str]) -> StoredObject:
    content_type = validate_upload(data, content_type)
    key = item_image_key(user_id, ext_from_content_type(content_type))
    s3 = storage_client()
    s3.put_object(
        Bucket=settings.STORAGE_BUCKET,
        Key=key,
        Body=data,
        ContentType=content_type,
        CacheControl="max-age=3600",
    )
    return StoredObject(key=key, url=object_url(key))


def delete_object(key: str) -> None:
    s3 = storage_client()
    s3.delete_object(Bucket=settings.STORAGE_BUCKET, Key=key)
