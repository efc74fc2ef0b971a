"""Transient on-disk storage for uploaded files, scoped to one request."""

import re
import shutil
import time
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from medreport.intake.exceptions import StorageError
from medreport.intake.models import IncomingFile, UploadedFile
from medreport.logging.logger import Log

_UNSAFE_CHARS = re.compile(r"[^\w.\-() ]+")

MAX_NAME_BYTES = 120
MAX_SUFFIX_BYTES = 16


def sanitize_filename(name: str) -> str:
    """Replace characters outside ``[\\w.-() ]`` so the name is safe on disk.

    Names longer than MAX_NAME_BYTES (UTF-8) lose the end of their stem; the
    suffix is kept so extension dispatch still works.
    """
    safe = _UNSAFE_CHARS.sub("_", Path(name).name).strip()
    if len(safe.encode("utf-8")) > MAX_NAME_BYTES:
        path = Path(safe)
        suffix = path.suffix if len(path.suffix.encode("utf-8")) <= MAX_SUFFIX_BYTES else ""
        budget = MAX_NAME_BYTES - len(suffix.encode("utf-8"))
        stem = path.stem.encode("utf-8")[:budget].decode("utf-8", "ignore").strip()
        safe = stem + suffix
    return safe or "upload"


class StorageSession:
    """Tracks every file written during one request so all of them can be released."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._session_id = uuid.uuid4().hex[:12]
        self._paths: list[Path] = []

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def store(self, incoming: IncomingFile) -> UploadedFile:
        """Copy an incoming stream into the scratch directory.

        Raises:
            StorageError: if the file cannot be written.
        """
        arrival_ms = int(time.time() * 1000)
        target = self._root / (
            f"{arrival_ms}_{self._session_id}_{len(self._paths)}_"
            f"{sanitize_filename(incoming.name)}"
        )
        # register before writing so a partial file is still released
        self._paths.append(target)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as out:
                shutil.copyfileobj(incoming.stream, out)
        except OSError as exc:
            raise StorageError(f"Could not store '{incoming.name}': {exc}") from exc
        return UploadedFile(
            file_id=incoming.name,
            path=target,
            media_type=incoming.media_type,
            size=incoming.size,
        )

    def release(self) -> None:
        """Delete every tracked file. Failures are logged, never raised."""
        for path in self._paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                Log.warning(f"Could not delete {path.name}: {exc}")
        Log.debug(f"Released {len(self._paths)} transient files")
        self._paths.clear()


class TransientStorage:
    """Scratch directory for uploads. Files live only inside a session."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    @contextmanager
    def session(self) -> Generator[StorageSession, None, None]:
        session = StorageSession(self._root)
        try:
            yield session
        finally:
            session.release()
