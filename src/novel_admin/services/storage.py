"""Local-directory object storage for uploaded banner images and icons."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path

from novel_admin.services.errors import DataAccessError, ValidationFailure

logger = logging.getLogger(__name__)

_SAFE_SEGMENT = re.compile(r"^[0-9A-Za-z][0-9A-Za-z._-]*$")


def object_key(prefix: str, filename: str | None, *, now_ms: int | None = None) -> str:
    """Build ``<prefix>-<epoch ms>.<ext>`` keeping the upload's extension."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    extension = (filename or "").rsplit(".", 1)[-1] if "." in (filename or "") else "bin"
    extension = re.sub(r"[^0-9A-Za-z]", "", extension).lower() or "bin"
    return f"{prefix}-{stamp}.{extension}"


class ObjectStorage:
    """Bucket/key store backed by directories under ``root``.

    Files are served by the app under ``public_base_url``.
    """

    def __init__(self, root: str | Path, public_base_url: str) -> None:
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _path(self, bucket: str, key: str) -> Path:
        for segment in (bucket, key):
            if not _SAFE_SEGMENT.match(segment):
                raise ValidationFailure(f"Invalid storage path segment {segment!r}", field="key")
        return self.root / bucket / key

    def upload(self, bucket: str, key: str, data: bytes) -> str:
        """Store ``data`` and return its public URL."""
        destination = self._path(bucket, key)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(data)
        except OSError as exc:
            logger.error("Failed to store %s/%s", bucket, key, exc_info=True)
            raise DataAccessError(f"Could not store {bucket}/{key}") from exc
        logger.info("Stored %d bytes at %s/%s", len(data), bucket, key)
        return self.get_public_url(bucket, key)

    def get_public_url(self, bucket: str, key: str) -> str:
        self._path(bucket, key)
        return f"{self.public_base_url}/{bucket}/{key}"
