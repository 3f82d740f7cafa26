# backend/reliefmap/services/image/validate.py
from typing import List, Sequence

from reliefmap.services.image.files import ImageFile

MAX_FILES = 5
MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB


def validate_image_files(files: Sequence[ImageFile], max_files: int = MAX_FILES, max_file_size: int = MAX_FILE_SIZE) -> List[str]:
    """Return every rule the batch breaks; an empty list means the batch is fine.

    An empty batch gets a single message. Otherwise all rules are checked
    and their messages collected, positions are 1-based.
    """
    if not files:
        return ["No files selected"]

    errors: List[str] = []
    if len(files) > max_files:
        errors.append(f"Maximum {max_files} images allowed")

    limit_mb = max_file_size // (1024 * 1024)
    for index, f in enumerate(files, start=1):
        if not f.is_image:
            errors.append(f"File {index} ({f.filename}) is not an image")
        if f.size > max_file_size:
            errors.append(f"File {index} ({f.filename}) is too large (>{limit_mb}MB)")
    return errors
