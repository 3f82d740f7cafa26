# backend/reliefmap/core/exceptions.py
"""Domain exceptions raised by services and translated to HTTP by the routers."""
from typing import List


class ReliefMapError(Exception):
    """Base class for application errors."""


class FileValidationError(ReliefMapError):
    """A photo batch broke one or more intake rules; `errors` lists them all."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class NonImageFileError(ReliefMapError):
    """A file in the batch is not declared as an image; the whole batch is rejected."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"File {filename} is not an image")


class RequestNotFoundError(ReliefMapError):
    def __init__(self, request_id: str) -> None:
        self.request_id = request_id
        super().__init__("Request not found")


class RequestStatusConflictError(ReliefMapError):
    """The request is not in the status the transition needs."""

    def __init__(self, request_id: str, current: str) -> None:
        self.request_id = request_id
        self.current = current
        super().__init__("Request is no longer available")
