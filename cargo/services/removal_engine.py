"""Deletes stored files and the directories they leave empty."""

import errno
import glob
import logging

from cargo.core.interfaces import FileRecord
from cargo.exceptions import StorageIOError
from cargo.services.path_resolver import PathResolver

logger = logging.getLogger(__name__)

# Raised by rmdir on a directory that still has entries (EEXIST on some platforms).
_EXPECTED_RMDIR_ERRORS = {errno.ENOTEMPTY, errno.EEXIST, errno.ENOENT}


class RemovalEngine:
    """Removes a record's file and prunes its empty id directories."""

    def __init__(self, resolver: PathResolver | None = None):
        self.resolver = resolver or PathResolver()

    def remove(self, file: FileRecord) -> bool:
        """Delete the file at the canonical path, then prune empty directories.

        A missing file is not an error, so calling this twice is safe.

        Returns:
            True if a file was deleted.
        """
        path = self.resolver.canonical_path(file)
        removed = False
        try:
            path.unlink()
            removed = True
            logger.info(f"🗑️ Removed {path}")
        except FileNotFoundError:
            logger.debug(f"Nothing to remove at {path}")
        except OSError as e:
            logger.error(f"❌ Failed to remove {path}: {e}")
            raise StorageIOError(f"Could not remove file: {e}", path=path) from e

        self._remove_leftover_temp_files(file)
        self.prune_directories(file)
        return removed

    def prune_directories(self, file: FileRecord) -> int:
        """Remove empty id directories above the file, stopping at the category.

        Walks up from the canonical directory one level per id directory
        (``mid`` then ``prefix``) and stops at the first directory that is
        missing or still has entries. The category directory is shared by
        every record of that category and is left in place.

        Returns:
            The number of directories removed.
        """
        directory = self.resolver.canonical_directory(file)
        # The last segment is the filename stem; the others are directories.
        levels = len(self.resolver.segments(file)) - 1
        removed = 0
        for _ in range(levels):
            try:
                directory.rmdir()
            except OSError as e:
                if e.errno not in _EXPECTED_RMDIR_ERRORS:
                    logger.warning(f"Could not prune {directory}: {e}")
                break
            logger.debug(f"Pruned empty directory {directory}")
            removed += 1
            directory = directory.parent
        return removed

    def _remove_leftover_temp_files(self, file: FileRecord):
        # An interrupted commit can leave a hidden temp file that would keep
        # the directory from being pruned.
        directory = self.resolver.canonical_directory(file)
        pattern = f".{glob.escape(self.resolver.base_filename(file))}.*.tmp"
        for leftover in directory.glob(pattern):
            try:
                leftover.unlink()
                logger.debug(f"Removed leftover temporary file {leftover}")
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Could not remove temporary file {leftover}: {e}")
