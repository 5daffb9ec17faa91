"""Parent model validations for file attachments.

Validations hook the parent's flush events and raise ``FileValidationError``,
which aborts the flush::

    attach(Image, "original")
    validates_file_exists(Image, "original", on="create")
    validates_file_extension_of(Image, "original", ["jpg", "gif", "png"])
"""

from sqlalchemy import event

from cargo.exceptions import FileValidationError
from cargo.models.stored_file import StoredFile

_EVENTS = {
    "save": ("before_insert", "before_update"),
    "create": ("before_insert",),
    "update": ("before_update",),
}


def _listen(parent_cls, on: str, check):
    try:
        events = _EVENTS[on]
    except KeyError:
        raise ValueError(f"on must be one of {', '.join(_EVENTS)}, got {on!r}") from None
    for identifier in events:
        event.listen(parent_cls, identifier, check)


def file_exists(stored) -> bool:
    """Whether ``stored`` has data: staged for a new record, on disk otherwise."""
    if not isinstance(stored, StoredFile):
        return False
    if stored.identity is None:
        return stored.has_pending_content()
    return stored.has_pending_content() or stored.canonical_path.exists()


def validates_file_exists(parent_cls, name: str, message: str = "must be set", on: str = "save"):
    """Require the ``name`` attachment to have file data.

    Args:
        parent_cls: The model ``name`` was attached to.
        name: The attachment name.
        message: Error message, reported under ``details[name]``.
        on: ``"save"`` (default), ``"create"`` or ``"update"``.
    """

    def check(mapper, connection, target):
        if not file_exists(getattr(target, name)):
            raise FileValidationError(f"{name} {message}", details={name: message})

    _listen(parent_cls, on, check)


def validates_file_extension_of(
    parent_cls,
    name: str,
    allowed,
    message: str = "does not have a valid file extension",
    on: str = "save",
):
    """Restrict the ``name`` attachment to the extensions in ``allowed``.

    Comparison is case-insensitive. A missing attachment passes; combine with
    ``validates_file_exists`` to require one.
    """
    if not isinstance(allowed, (list, tuple, set, frozenset)):
        raise ValueError("An iterable of valid extensions must be given as allowed")
    valid = {str(extension).lower() for extension in allowed}

    def check(mapper, connection, target):
        stored = getattr(target, name)
        if not isinstance(stored, StoredFile):
            return
        if (stored.extension or "").lower() not in valid:
            raise FileValidationError(f"{name} {message}", details={name: message})

    _listen(parent_cls, on, check)
