"""
Integration tests for file attachments saved through an async session.
"""

import pytest
from sqlalchemy import func, select

from cargo import attach
from cargo.exceptions import FileNotSetError
from cargo.models import StoredFile
from tests.factories import ImageFactory, create_image_with_original
from tests.models import Image


def stored_files(root):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


class TestAttachments:
    """Test cases for attachments on a parent model."""

    @pytest.mark.asyncio
    async def test_save_writes_file(self, test_db, snail, storage_root):
        """Test saving the parent stores the file under its canonical path."""
        image = await create_image_with_original(test_db, snail("jpg"))

        original = image.original
        assert original.id is not None
        assert original.parent_id == image.id
        assert original.parent_type == "images"
        assert original.name == "original"
        assert original.original_filename == "snail.jpg"
        assert original.extension == "jpg"
        assert len(original.key) == 6
        assert original.canonical_path.read_bytes() == snail("jpg").read_bytes()
        assert stored_files(storage_root) == [f"{original.subdirectory}/{original.filename}"]

    @pytest.mark.asyncio
    async def test_delete_removes_file_and_empty_directories(self, test_db, snail, storage_root):
        """Test deleting the parent removes the file and prunes its directories."""
        image = await create_image_with_original(test_db, snail("jpg"))
        path = image.original.canonical_path

        await test_db.delete(image)
        await test_db.commit()

        assert not path.exists()
        assert not path.parent.exists()
        assert not path.parent.parent.exists()
        assert (storage_root / "images").is_dir()
        assert await test_db.scalar(select(func.count()).select_from(StoredFile)) == 0

    @pytest.mark.asyncio
    async def test_delete_keeps_non_empty_directories(self, test_db, snail, storage_root):
        """Test directories shared with other files survive a delete."""
        first = await create_image_with_original(test_db, snail("jpg"))
        second = await create_image_with_original(test_db, snail("png"))
        assert first.original.canonical_directory == second.original.canonical_directory

        await test_db.delete(first)
        await test_db.commit()

        assert second.original.canonical_path.exists()
        assert second.original.canonical_directory.is_dir()

    @pytest.mark.asyncio
    async def test_replace_file(self, test_db, snail, storage_root):
        """Test setting new data with another extension leaves a single file."""
        image = await create_image_with_original(test_db, snail("jpg"))
        stored_id = image.original.id

        image.set_original(snail("png"))
        await test_db.commit()

        assert image.original.id == stored_id
        assert image.original.extension == "png"
        assert image.original.canonical_path.read_bytes() == snail("png").read_bytes()
        assert len(stored_files(storage_root)) == 1

    @pytest.mark.asyncio
    async def test_set_from_open_file(self, test_db, snail):
        """Test an open file can be used as the source."""
        with open(snail("png"), "rb") as f:
            image = await create_image_with_original(test_db, f)

        assert image.original.original_filename == "snail.png"
        assert image.original.canonical_path.exists()

    @pytest.mark.asyncio
    async def test_parent_without_attachment(self, test_db, storage_root):
        """Test a parent without any attachment saves normally."""
        image = ImageFactory.build()
        test_db.add(image)
        await test_db.commit()

        assert image.id is not None
        assert image.original is None
        assert not storage_root.exists()

    @pytest.mark.asyncio
    async def test_build_without_data(self, test_db, storage_root):
        """Test an attachment without data can't be inserted."""
        image = ImageFactory.build()
        image.build_original()
        test_db.add(image)

        with pytest.raises(FileNotSetError):
            await test_db.commit()
        await test_db.rollback()

        assert not storage_root.exists()

    @pytest.mark.asyncio
    async def test_multiple_attachments(self, test_db, snail, storage_root):
        """Test each attachment gets its own row and file."""
        image = ImageFactory.build()
        image.set_original(snail("jpg"))
        image.set_thumbnail(snail("png"))
        test_db.add(image)
        await test_db.commit()

        assert image.original.id != image.thumbnail.id
        assert image.original.name == "original"
        assert image.thumbnail.name == "thumbnail"
        assert image.original.canonical_path.exists()
        assert image.thumbnail.canonical_path.exists()
        assert len(stored_files(storage_root)) == 2

    @pytest.mark.asyncio
    async def test_attachments_are_scoped_by_name(self, test_db, snail):
        """Test a new session loads each attachment from its own row."""
        image = ImageFactory.build()
        image.set_original(snail("jpg"))
        image.set_thumbnail(snail("png"))
        test_db.add(image)
        await test_db.commit()
        test_db.expunge_all()

        loaded = await test_db.get(Image, image.id)

        assert loaded.original.extension == "jpg"
        assert loaded.thumbnail.extension == "png"

    @pytest.mark.asyncio
    async def test_cleared_key_is_regenerated(self, test_db, snail, storage_root):
        """Test clearing the key before setting new data gives a new filename."""
        image = await create_image_with_original(test_db, snail("jpg"))
        old_path = image.original.canonical_path

        image.original.key = None
        image.set_original(snail("jpg"))
        await test_db.commit()

        assert image.original.key
        assert not old_path.exists()
        assert image.original.canonical_path.exists()
        assert len(stored_files(storage_root)) == 1

    @pytest.mark.asyncio
    async def test_public_url(self, test_db, snail):
        """Test the public url carries the mtime only while the file exists."""
        image = await create_image_with_original(test_db, snail("jpg"))
        original = image.original

        url = original.public_url
        assert url.startswith(f"/files/{original.subdirectory}/{original.filename}?")

        original.remove()
        assert original.public_url == f"/files/{original.subdirectory}/{original.filename}"

    @pytest.mark.asyncio
    async def test_orphaned_attachment_is_removed(self, test_db, snail, storage_root):
        """Test unsetting an attachment deletes its row and file."""
        image = await create_image_with_original(test_db, snail("jpg"))
        path = image.original.canonical_path

        image.original = None
        await test_db.commit()

        assert not path.exists()
        assert await test_db.scalar(select(func.count()).select_from(StoredFile)) == 0

    def test_attach_rejects_existing_attribute(self):
        """Test attaching over an existing attribute fails."""
        with pytest.raises(ValueError):
            attach(Image, "title")

    def test_attach_requires_a_name(self):
        with pytest.raises(ValueError):
            attach(Image)
