"""Writes staged file data to its canonical location."""

import glob
import logging
import os
import tempfile
from pathlib import Path

from cargo.core.interfaces import FileRecord
from cargo.exceptions import StorageIOError
from cargo.services.key_generator import KeyGenerator
from cargo.services.path_resolver import PathResolver
from cargo.services.staging_buffer import StagingBuffer

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"

# os.umask can only be read by setting it.
_UMASK = os.umask(0)
os.umask(_UMASK)
# Temporary files are created 0600; stored files get the mode a plain open() would.
FILE_MODE = 0o666 & ~_UMASK


class CommitEngine:
    """Materializes a staging buffer at a record's canonical path."""

    def __init__(
        self,
        resolver: PathResolver | None = None,
        key_generator: KeyGenerator | None = None,
    ):
        self.resolver = resolver or PathResolver()
        self.key_generator = key_generator or KeyGenerator()

    def ensure_key(self, file: FileRecord) -> str:
        """Assign a random key to ``file`` unless it already has one."""
        if not file.key:
            file.key = self.key_generator.generate()
            logger.debug(f"Assigned key {file.key} to stored file {file.identity}")
        return file.key

    def commit(self, file: FileRecord, buffer: StagingBuffer) -> bool:
        """Write ``buffer`` to the canonical path of ``file``.

        The content is written to a hidden temporary file next to the target,
        any older file for the same id (different key or extension) is
        removed, and the temporary file is then renamed over the target.

        Returns:
            True if content was written, False if nothing was pending.

        Raises:
            IdentityMissing: If ``file`` has no identity yet.
            StorageIOError: If the filesystem fails. The buffer is kept so the
                commit can be retried.
        """
        if not buffer.has_pending_content():
            return False

        self.ensure_key(file)
        directory = self.resolver.canonical_directory(file)
        target = directory / self.resolver.filename(file)
        base_filename = self.resolver.base_filename(file)

        temp_path = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=directory, prefix=f".{base_filename}.", suffix=TEMP_SUFFIX, delete=False
            ) as handle:
                temp_path = handle.name
                buffer.write_to(handle)
            os.chmod(temp_path, FILE_MODE)
            self._remove_stale_files(
                directory, base_filename, keep={target.name, Path(temp_path).name}
            )
            os.replace(temp_path, target)
            temp_path = None
        except OSError as e:
            logger.error(f"❌ Failed to store {target}: {e}")
            raise StorageIOError(f"Could not store file: {e}", path=target) from e
        finally:
            self._discard_temp_file(temp_path)

        buffer.discard()
        logger.info(f"✅ Stored {target}")
        return True

    def _remove_stale_files(self, directory: Path, base_filename: str, keep: set[str]):
        # The key or extension may have changed since the last commit, so
        # anything starting with the id-derived stem belongs to this record,
        # as do temporary files left by an interrupted commit.
        stem = glob.escape(base_filename)
        patterns = (f"{stem}*", f".{stem}.*{TEMP_SUFFIX}")
        for pattern in patterns:
            for existing in directory.glob(pattern):
                if existing.name not in keep and existing.is_file():
                    existing.unlink()
                    logger.debug(f"Removed stale file {existing}")

    @staticmethod
    def _discard_temp_file(temp_path: str | None):
        if temp_path is None:
            return
        try:
            os.unlink(temp_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temporary file {temp_path}: {e}")
