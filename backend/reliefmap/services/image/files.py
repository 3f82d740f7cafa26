# backend/reliefmap/services/image/files.py
from dataclasses import dataclass, replace

IMAGE_TYPE_PREFIX = "image/"


@dataclass(frozen=True)
class ImageFile:
    """An uploaded file as the intake pipeline sees it. Never mutated; compression returns a copy."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_image(self) -> bool:
        return (self.content_type or "").startswith(IMAGE_TYPE_PREFIX)

    def with_data(self, data: bytes) -> "ImageFile":
        return replace(self, data=data)
