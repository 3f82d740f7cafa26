# backend/reliefmap/services/storage.py
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


class StorageError(Exception):
    pass


def _safe_segment(name: str) -> str:
    # one path segment: no separators, no leading dots
    cleaned = _UNSAFE.sub("_", Path(name or "").name).lstrip(".")
    return cleaned or "file"


def photo_object_path(user_id: str, index: int, filename: str, now: Optional[datetime] = None) -> str:
    """requests/<user>/<epoch ms>-<index>-<name>; the same inputs give the same path."""
    ts = int((now or datetime.now(timezone.utc)).timestamp() * 1000)
    return f"requests/{_safe_segment(user_id)}/{ts}-{index}-{_safe_segment(filename)}"


class LocalObjectStorage:
    """Bucket on the local disk, published through the static /data mount."""

    def __init__(self, root: Path, base_url: str = "/data", bucket: str = "photos") -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket

    def _target(self, path: str) -> Path:
        bucket_dir = (self.root / self.bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise StorageError(f"path escapes bucket: {path}")
        return target

    def upload(self, path: str, data: bytes) -> str:
        target = self._target(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageError(f"could not store {path}: {e}") from e
        logger.debug("stored %s (%d bytes)", target, len(data))
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{self.bucket}/{quote(path)}"

    def delete(self, path: str) -> None:
        target = self._target(path)
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"could not delete {path}: {e}") from e
