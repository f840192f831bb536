"""S3 storage for car listing photos."""

import logging
import uuid
from typing import Iterable, Optional

from dealership.core.config import settings
from dealership.core.exceptions import AppException

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg",
    "image/png",
    "image/webp",
}
DELETE_BATCH_SIZE = 1000
EXT_BY_CONTENT_TYPE = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


def _get_s3_client():
    """Create S3 client. Raises if S3 is not configured."""
    if not settings.S3_BUCKET_NAME:
        AppException().raise_400(
            "Image upload is not configured. Set S3_BUCKET_NAME and AWS credentials."
        )
    try:
        import boto3
        from botocore.config import Config
        config = Config(signature_version="s3v4", region_name=settings.AWS_REGION)
        kwargs = {"region_name": settings.AWS_REGION, "config": config}
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
            kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
        return boto3.client("s3", **kwargs)
    except Exception as e:
        logger.exception("Failed to create S3 client: %s", e)
        AppException().raise_500("Storage is temporarily unavailable.")


def public_url(key: str) -> str:
    """Public URL for a stored key. Absolute URLs pass through unchanged."""
    if key.startswith("http://") or key.startswith("https://"):
        return key
    if not settings.S3_BUCKET_NAME:
        return key
    return f"https://{settings.S3_BUCKET_NAME}.s3.{settings.AWS_REGION}.amazonaws.com/{key}"


def key_from_url(url: str) -> Optional[str]:
    """Object key for a URL built by public_url(), or None if it points elsewhere."""
    prefix = f"https://{settings.S3_BUCKET_NAME}.s3.{settings.AWS_REGION}.amazonaws.com/"
    if settings.S3_BUCKET_NAME and url.startswith(prefix):
        return url[len(prefix):]
    if not url.startswith("http://") and not url.startswith("https://"):
        return url
    return None


def validate_car_image(file_content: bytes, content_type: Optional[str]) -> None:
    if not file_content:
        AppException().raise_400("Empty file.")
    if len(file_content) > settings.CAR_IMAGE_MAX_BYTES:
        AppException().raise_400(
            f"File too large. Maximum size is {settings.CAR_IMAGE_MAX_BYTES // (1024 * 1024)} MB."
        )
    if content_type not in ALLOWED_CONTENT_TYPES:
        AppException().raise_400(
            f"Invalid file type. Allowed: {', '.join(sorted(ALLOWED_CONTENT_TYPES))}"
        )


def upload_car_image(
    file_content: bytes,
    car_id: str,
    content_type: str,
) -> str:
    """
    Upload one listing photo to S3 under ``<prefix>/<car_id>/``.

    Returns:
        Public URL of the uploaded object.
    """
    validate_car_image(file_content, content_type)
    ext = EXT_BY_CONTENT_TYPE.get(content_type, ".jpg")
    key = f"{settings.S3_CAR_IMAGES_PREFIX}/{car_id}/{uuid.uuid4().hex}{ext}"
    client = _get_s3_client()
    try:
        client.put_object(
            Bucket=settings.S3_BUCKET_NAME,
            Key=key,
            Body=file_content,
            ContentType=content_type,
            CacheControl="max-age=31536000",
        )
    except Exception as e:
        logger.exception("S3 upload failed: %s", e)
        AppException().raise_500("Failed to upload image. Please try again.")
    return public_url(key)


def delete_objects(urls: Iterable[str]) -> int:
    """
    Best-effort removal of stored photos. Returns how many keys were sent for deletion.
    Storage errors are logged, not raised, so row deletion is never blocked by S3.
    """
    keys = [k for k in (key_from_url(u) for u in urls) if k]
    if not keys or not settings.S3_BUCKET_NAME:
        return 0
    try:
        client = _get_s3_client()
    except Exception as e:
        logger.warning("S3 delete failed for %d object(s): %s", len(keys), e)
        return 0

    deleted = 0
    # DeleteObjects takes at most 1000 keys per request
    for start in range(0, len(keys), DELETE_BATCH_SIZE):
        batch = keys[start:start + DELETE_BATCH_SIZE]
        try:
            client.delete_objects(
                Bucket=settings.S3_BUCKET_NAME,
                Delete={"Objects": [{"Key": k} for k in batch], "Quiet": True},
            )
        except Exception as e:
            logger.warning("S3 delete failed for %d object(s): %s", len(batch), e)
            continue
        deleted += len(batch)
    return deleted
