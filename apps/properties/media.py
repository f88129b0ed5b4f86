"""Listing image upload to the S3-compatible media host.

Images are validated and downscaled with Pillow before being pushed to the
bucket; callers get back public URLs to store on the listing.
"""

from __future__ import annotations

import hashlib
import logging
import uuid
from io import BytesIO

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings  # type: ignore
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = ("JPEG", "PNG", "WEBP")


class MediaUploadError(Exception):
    """Raised when an image is rejected or the media host fails."""


def _client():
    return boto3.client(
        "s3",
        endpoint_url=settings.S3_ENDPOINT_URL or None,
        aws_access_key_id=settings.S3_ACCESS_KEY or None,
        aws_secret_access_key=settings.S3_SECRET_KEY or None,
        region_name=settings.S3_REGION,
        config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


def _validate_image(file_obj) -> Image.Image:
    size = getattr(file_obj, "size", None)
    if size is not None and size > settings.PHOTO_MAX_SIZE:
        raise MediaUploadError(
            f"File too large. Maximum is {settings.PHOTO_MAX_SIZE / 1024 / 1024:.1f} MB"
        )
    try:
        file_obj.seek(0)
        img = Image.open(file_obj)
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise MediaUploadError(f"Invalid image: {e}") from e
    if img.format not in ALLOWED_FORMATS:
        raise MediaUploadError(f"Unsupported format: {img.format}")
    return img


def _optimize_image(img: Image.Image, quality: int = 85) -> tuple[BytesIO, str, str]:
    """Returns (buffer, extension, content type); RGBA images stay WEBP."""
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGB")

    max_dimension = settings.PHOTO_MAX_DIMENSION
    if img.width > max_dimension or img.height > max_dimension:
        img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

    out = BytesIO()
    if img.mode == "RGBA":
        img.save(out, format="WEBP", quality=quality, method=6)
        ext, content_type = "webp", "image/webp"
    else:
        img.save(out, format="JPEG", quality=quality, optimize=True)
        ext, content_type = "jpg", "image/jpeg"
    out.seek(0)
    return out, ext, content_type


def public_url(key: str) -> str:
    base = (settings.S3_PUBLIC_BASE or "").rstrip("/")
    if base:
        return f"{base}/{key}"
    endpoint = (settings.S3_ENDPOINT_URL or "").rstrip("/")
    if endpoint:
        return f"{endpoint}/{settings.S3_BUCKET_NAME}/{key}"
    return f"https://{settings.S3_BUCKET_NAME}.s3.{settings.S3_REGION}.amazonaws.com/{key}"


def upload_image(file_obj, folder: str = "properties") -> str:
    """Uploads one image and returns its public URL."""
    img = _validate_image(file_obj)
    optimized, ext, content_type = _optimize_image(img)
    digest = hashlib.md5(optimized.getbuffer()).hexdigest()[:8]
    key = f"{folder}/{digest}_{uuid.uuid4().hex[:8]}.{ext}"

    try:
        _client().put_object(
            Bucket=settings.S3_BUCKET_NAME,
            Key=key,
            Body=optimized.getvalue(),
            ContentType=content_type,
            CacheControl="max-age=31536000",
            Metadata={"original_name": getattr(file_obj, "name", "") or ""},
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Media host rejected upload of {key}: {e}")
        raise MediaUploadError("Image upload failed") from e

    logger.info(f"Uploaded listing image {key}")
    return public_url(key)


def upload_images(files, folder: str = "properties") -> list[str]:
    return [upload_image(f, folder=folder) for f in files]
