"""Path and url derivation for stored files."""

import os
from pathlib import Path, PurePosixPath

from cargo.core.config import get_settings
from cargo.core.interfaces import FileRecord
from cargo.exceptions import StorageRootNotConfigured, UrlPrefixNotConfigured
from cargo.services.identity_encoder import IdentityEncoder

SEPARATOR = "_"


class PathResolver:
    """Derives where a stored file lives on disk and online.

    Every method is a function of the record's current ``identity``,
    ``category``, ``key`` and ``extension``. Only ``public_url`` touches the
    filesystem, to read the file's modification time.

    ``storage_root`` and ``url_prefix`` default to ``settings.file_path`` and
    ``settings.url_subdir``, read each time they are needed.
    """

    def __init__(
        self,
        storage_root: str | os.PathLike | None = None,
        url_prefix: str | None = None,
        encoder: IdentityEncoder | None = None,
    ):
        self._storage_root = storage_root
        self._url_prefix = url_prefix
        self.encoder = encoder or IdentityEncoder()

    @property
    def storage_root(self) -> Path:
        root = self._storage_root
        if root is None:
            root = get_settings().file_path
        if root is None or str(root) == "":
            raise StorageRootNotConfigured()
        return Path(root)

    @property
    def url_prefix(self) -> str:
        prefix = self._url_prefix
        if prefix is None:
            prefix = get_settings().url_subdir
        if prefix is None:
            raise UrlPrefixNotConfigured()
        return prefix

    def segments(self, file: FileRecord) -> list[str]:
        return self.encoder.encode(file.identity)

    def subdirectory(self, file: FileRecord) -> str:
        """
        Returns the directory of ``file`` relative to the storage root, e.g.
        ``images/00/01``. Always uses forward slashes.
        """
        prefix, mid, _ = self.segments(file)
        if not file.category:
            raise ValueError("A stored file needs a category to derive its directory")
        return PurePosixPath(file.category, prefix, mid).as_posix()

    def base_filename(self, file: FileRecord) -> str:
        return SEPARATOR.join(self.segments(file))

    def filename(self, file: FileRecord) -> str:
        """
        Returns the filename for ``file``: the id segments joined with
        underscores, then ``_key`` and ``.extension`` when those are set.
        Id 1947 with key "myk25s" and extension "jpg" gives
        ``00_01_i3_myk25s.jpg``.
        """
        name = self.base_filename(file)
        if file.key:
            name = f"{name}{SEPARATOR}{file.key}"
        if file.extension:
            name = f"{name}.{file.extension}"
        return name

    def split_filename(self, name: str) -> tuple[str, str, str]:
        """Split a filename built by ``filename`` into ``(base, key, extension)``."""
        stem, _, extension = name.partition(".")
        parts = stem.split(SEPARATOR)
        if len(parts) < 3 or len(parts) > 4:
            raise ValueError(f"Not a stored filename: {name!r}")
        base = SEPARATOR.join(parts[:3])
        key = parts[3] if len(parts) == 4 else ""
        return base, key, extension

    def canonical_directory(self, file: FileRecord) -> Path:
        return self.storage_root.joinpath(*PurePosixPath(self.subdirectory(file)).parts)

    def canonical_path(self, file: FileRecord) -> Path:
        return self.canonical_directory(file) / self.filename(file)

    def public_url(self, file: FileRecord) -> str:
        """
        Returns the url of ``file`` under ``url_prefix``. When the file exists
        on disk its modification time is appended as a cache-busting query,
        e.g. ``/files/images/00/01/00_01_i3_myk25s.jpg?1700000000``.
        """
        parts = [self.url_prefix]
        parts.extend(self.subdirectory(file).split("/"))
        parts.append(f"{self.filename(file)}{self._mtime_suffix(file)}")
        return "/".join(part[:-1] if part.endswith("/") else part for part in parts)

    def _mtime_suffix(self, file: FileRecord) -> str:
        if self._storage_root is None and not get_settings().has_storage_root:
            return ""
        try:
            mtime = self.canonical_path(file).stat().st_mtime
        except (FileNotFoundError, NotADirectoryError):
            return ""
        return f"?{int(mtime)}"
