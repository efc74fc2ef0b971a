from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO


@dataclass(frozen=True)
class IncomingFile:
    """A file received with a request, before it is written to transient storage."""

    name: str
    media_type: str
    size: int
    stream: BinaryIO


@dataclass(frozen=True)
class UploadedFile:
    """A file held in transient storage for the lifetime of one request."""

    file_id: str
    path: Path
    media_type: str
    size: int
