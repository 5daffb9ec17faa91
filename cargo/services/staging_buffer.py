"""Temporary storage for file data between ``set`` and commit."""

import logging
import os
import re
import shutil
import tempfile

from starlette.datastructures import UploadFile

from cargo.core.config import get_settings
from cargo.exceptions import SourceUnreadable, StorageIOError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
_BASENAME_RE = re.compile(r"^(?:.*[:\\/])?(.*)", re.DOTALL)


def parse_original_filename(reference: str | None) -> str | None:
    """Return the last segment of a path, ignoring drive and separator prefixes."""
    if reference is None:
        return None
    return _BASENAME_RE.match(reference).group(1)


def parse_extension(filename: str | None) -> str:
    """Return whatever follows the last dot in ``filename``, or ``""``."""
    if not filename:
        return ""
    _, dot, extension = filename.rpartition(".")
    return extension if dot else ""


class StagingBuffer:
    """Holds assigned file data in a temporary file until it is committed.

    Only one assignment is pending at a time: each ``assign`` discards the
    previous buffer before reading the new source.
    """

    def __init__(self, staging_dir: str | os.PathLike | None = None):
        self._staging_dir = staging_dir
        self._tempfile = None
        self._size = 0
        self.original_filename: str | None = None
        self.extension: str = ""

    @property
    def size(self) -> int:
        return self._size if self._tempfile is not None else 0

    def has_pending_content(self) -> bool:
        return self._tempfile is not None and self._size > 0

    def assign(self, source) -> bool:
        """Stage the contents of ``source``.

        Args:
            source: A filesystem path (``str`` or ``os.PathLike``), a readable
                stream, or an ``UploadFile``.

        Returns:
            True if the staged content is non-empty.

        Raises:
            SourceUnreadable: If the source can't be opened or read.
        """
        self.discard()

        if isinstance(source, (str, os.PathLike)):
            reference = os.fspath(source)
            try:
                stream = open(reference, "rb")
            except OSError as e:
                raise SourceUnreadable(
                    f"Could not open {reference}: {e.strerror or e}",
                    details={"source": reference},
                ) from e
            with stream:
                self._fill(stream, reference)
        elif isinstance(source, UploadFile):
            reference = source.filename
            self._fill(source.file, reference)
        elif hasattr(source, "read"):
            reference = self._reference_for(source)
            self._fill(source, reference)
        else:
            raise SourceUnreadable(
                f"Unsupported file source: {type(source).__name__}",
                details={"source_type": type(source).__name__},
            )

        self.original_filename = parse_original_filename(reference)
        self.extension = parse_extension(self.original_filename)
        logger.debug(f"Staged {self._size} bytes from {reference!r}")
        return self.has_pending_content()

    def write_to(self, stream) -> int:
        """Copy the staged content into ``stream`` and return the byte count."""
        if self._tempfile is None:
            return 0
        self._tempfile.seek(0)
        shutil.copyfileobj(self._tempfile, stream, CHUNK_SIZE)
        return self._size

    def discard(self):
        """Close and delete the temporary file, if any."""
        if self._tempfile is not None:
            self._tempfile.close()
        self._tempfile = None
        self._size = 0

    @staticmethod
    def _reference_for(source) -> str | None:
        for attribute in ("original_path", "filename", "name"):
            value = getattr(source, attribute, None)
            if isinstance(value, (str, os.PathLike)):
                return os.fspath(value)
        return None

    def _fill(self, stream, reference):
        staging_dir = self._staging_dir or get_settings().staging_dir
        try:
            self._tempfile = tempfile.TemporaryFile(prefix="cargo_", dir=staging_dir)
        except OSError as e:
            raise StorageIOError(f"Could not create a staging file: {e}", path=staging_dir) from e

        size = 0
        try:
            while True:
                try:
                    chunk = stream.read(CHUNK_SIZE)
                except (OSError, ValueError) as e:
                    raise SourceUnreadable(
                        f"Could not read file source: {e}",
                        details={"source": reference},
                    ) from e
                if not chunk:
                    break
                if isinstance(chunk, str):
                    chunk = chunk.encode("utf-8")
                try:
                    self._tempfile.write(chunk)
                except OSError as e:
                    raise StorageIOError(f"Could not write staging file: {e}") from e
                size += len(chunk)
        except (SourceUnreadable, StorageIOError):
            self.discard()
            raise
        self._size = size
