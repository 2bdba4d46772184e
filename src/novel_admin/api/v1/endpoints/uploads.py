"""Helpers shared by endpoints that accept image uploads."""

from __future__ import annotations

from fastapi import UploadFile

from novel_admin.services.errors import ValidationFailure
from novel_admin.services.storage import ObjectStorage, object_key


async def store_image(
    storage: ObjectStorage,
    upload: UploadFile,
    *,
    bucket: str,
    prefix: str,
    max_bytes: int,
) -> dict[str, str]:
    """Validate and store an uploaded image, returning bucket, key and URL."""
    if upload.content_type and not upload.content_type.startswith("image/"):
        raise ValidationFailure("Only image files can be uploaded", field="file")
    data = await upload.read()
    if len(data) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ValidationFailure(f"Image must be at most {limit_mb}MB", field="file")
    key = object_key(prefix, upload.filename)
    url = storage.upload(bucket, key, data)
    return {"bucket": bucket, "key": key, "url": url}
