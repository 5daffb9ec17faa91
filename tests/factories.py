"""
Test data factories for generating test objects.

This module provides Factory Boy factories for creating test data objects
with realistic default values and easy customization.
"""

import factory
from factory.alchemy import SQLAlchemyModelFactory

from cargo.models import StoredFile
from tests.models import Image


class StoredFileFactory(SQLAlchemyModelFactory):
    """Factory for StoredFile instances.

    Use ``build()``: the id is set directly, as if the row had been flushed,
    so path methods work without a database.
    """

    class Meta:
        model = StoredFile
        sqlalchemy_session = None  # Will be set at runtime

    id = factory.Sequence(lambda n: n + 1)
    parent_id = factory.Sequence(lambda n: n + 1)
    parent_type = "images"
    name = "original"
    key = factory.Iterator(["myk25s", "4b2xu3", "q7tz9k"])
    extension = "jpg"
    original_filename = factory.LazyAttribute(lambda o: f"snail.{o.extension}")


class ImageFactory(SQLAlchemyModelFactory):
    """Factory for creating Image test instances."""

    class Meta:
        model = Image
        sqlalchemy_session = None  # Will be set at runtime

    title = factory.Faker("sentence", nb_words=3)


async def create_image_with_original(session, source, **image_kwargs) -> Image:
    """Create and commit an image whose original is read from ``source``."""
    image = ImageFactory.build(**image_kwargs)
    image.set_original(source)
    session.add(image)
    await session.commit()
    return image
