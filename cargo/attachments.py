"""Named file attachments for SQLAlchemy models.

``attach`` gives a parent model one-to-one attachments backed by
``StoredFile`` rows::

    class Image(Base):
        __tablename__ = "images"
        id = Column(Integer, primary_key=True)

    attach(Image, "original", "thumbnail")

    image = Image()
    image.set_original("path/to/image.jpg")     # builds the StoredFile and stages the data
    session.add(image)
    session.commit()                            # writes images/00/00/00_00_01_<key>.jpg

    image.original.filename                     # "00_00_01_4b2xu3.jpg"
    session.delete(image)                       # removes the file and empty directories

Attachments are saved and deleted along with the parent. Several names on one
model are told apart by the ``name`` column, and models by ``parent_type``.
"""

import logging

from sqlalchemy import and_, event
from sqlalchemy.orm import foreign, relationship, remote
from sqlalchemy.orm.attributes import flag_dirty

from cargo.models.stored_file import StoredFile

logger = logging.getLogger(__name__)

# Every attachment writes StoredFile.parent_id, so each new relationship is
# declared as overlapping the ones before it.
_attachment_names: set[str] = set()


def attach(parent_cls, *names: str):
    """Declare named file attachments on a mapped parent class.

    For each name this adds:

    * ``parent.<name>``: the ``StoredFile`` relationship, loaded with
      ``selectin`` and cascading saves and deletes
    * ``parent.build_<name>()``: create an empty attachment
    * ``parent.set_<name>(source)``: build the attachment if needed, then
      stage ``source`` on it

    Args:
        parent_cls: A declarative model with an integer ``id`` primary key.
        names: Attachment names, e.g. ``"original"``, ``"thumbnail"``.
    """
    if not names:
        raise ValueError("attach() needs at least one attachment name")

    discriminator = parent_cls.__tablename__
    for name in names:
        if name in parent_cls.__dict__:
            raise ValueError(f"{parent_cls.__name__} already defines {name!r}")

        _attachment_names.add(name)
        setattr(
            parent_cls,
            name,
            relationship(
                StoredFile,
                primaryjoin=and_(
                    parent_cls.id == foreign(remote(StoredFile.parent_id)),
                    StoredFile.parent_type == discriminator,
                    StoredFile.name == name,
                ),
                uselist=False,
                lazy="selectin",
                cascade="all, delete-orphan",
                overlaps=",".join(sorted(_attachment_names)),
            ),
        )
        event.listen(getattr(parent_cls, name), "set", _stamp_attachment(discriminator, name))
        setattr(parent_cls, f"build_{name}", _builder(name))
        setattr(parent_cls, f"set_{name}", _setter(name))
        logger.debug(f"Attached {name!r} to {parent_cls.__name__}")

    return parent_cls


def _stamp_attachment(discriminator: str, name: str):
    def stamp(target, value, oldvalue, initiator):
        if value is not None:
            value.parent_type = discriminator
            value.name = name

    return stamp


def _builder(name: str):
    def build(self) -> StoredFile:
        stored = StoredFile()
        setattr(self, name, stored)
        return stored

    build.__name__ = f"build_{name}"
    return build


def _setter(name: str):
    def set_file(self, source) -> bool:
        stored = getattr(self, name)
        if stored is None:
            stored = getattr(self, f"build_{name}")()
        if not stored.set(source):
            return False
        # Put the parent through the flush so its validations see the new data.
        flag_dirty(self)
        return True

    set_file.__name__ = f"set_{name}"
    return set_file
