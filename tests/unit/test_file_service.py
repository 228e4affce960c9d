"""
FileService tests
"""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from schemas.comments import CommentCreate
from schemas.files import FileCreate, FileUpdate


def file_payload(user_id, name="notes.txt", **overrides):
    data = {
        "filename": f"stored-{name}",
        "original_name": name,
        "file_path": f"uploads/stored-{name}",
        "file_size": 10,
        "mime_type": "text/plain",
        "uploaded_by": user_id,
    }
    data.update(overrides)
    return FileCreate(**data)


class TestCreateFile:

    async def test_returns_row_joined_with_uploader(self, gateway, test_user, test_file):
        assert test_file.id is not None
        assert test_file.uploaded_by == test_user.id
        assert test_file.uploader_name == "Owner"
        assert test_file.uploader_email == "owner@example.com"
        assert test_file.description == "Quarterly report"

    async def test_description_optional(self, gateway, test_user):
        created = await gateway.files.create_file(file_payload(test_user.id))

        assert created.description is None

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            file_payload(1, file_size=-1)

    async def test_negative_size_rejected_by_store(self, gateway, test_user):
        bypassed = FileCreate.model_construct(
            filename="x", original_name="x", file_path="x", file_size=-5,
            mime_type=None, description=None, uploaded_by=test_user.id,
        )

        with pytest.raises(IntegrityError):
            await gateway.files.create_file(bypassed)

        assert await gateway.files.get_all_files() == []


class TestReadFiles:

    async def test_get_missing_returns_none(self, gateway):
        assert await gateway.files.get_file_by_id(404) is None

    async def test_get_all_newest_first(self, gateway, test_user):
        for name in ("a.txt", "b.txt", "c.txt"):
            await gateway.files.create_file(file_payload(test_user.id, name))

        files = await gateway.files.get_all_files()

        assert [f.original_name for f in files] == ["c.txt", "b.txt", "a.txt"]
        assert all(f.uploader_email == "owner@example.com" for f in files)


class TestUpdateFile:

    async def test_description_change_advances_updated_at(self, gateway, test_file):
        updated = await gateway.files.update_file(test_file.id, FileUpdate(description="x"))

        assert updated.description == "x"
        assert updated.updated_at > test_file.updated_at
        assert updated.created_at == test_file.created_at
        unchanged = {"id", "filename", "original_name", "file_path", "file_size",
                     "mime_type", "uploaded_by", "uploader_name", "uploader_email"}
        assert updated.model_dump(include=unchanged) == test_file.model_dump(include=unchanged)

    async def test_empty_patch_still_touches_updated_at(self, gateway, test_file):
        updated = await gateway.files.update_file(test_file.id, FileUpdate())

        assert updated.updated_at > test_file.updated_at

    async def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            FileUpdate(**{"uploaded_by": 2})

    async def test_missing_file_returns_none(self, gateway):
        assert await gateway.files.update_file(404, FileUpdate(description="x")) is None

    def test_null_for_required_column_rejected(self):
        for field in ("filename", "original_name", "file_path", "file_size"):
            with pytest.raises(ValidationError):
                FileUpdate(**{field: None})

    async def test_null_clears_description(self, gateway, test_file):
        updated = await gateway.files.update_file(test_file.id, FileUpdate(description=None))

        assert updated.description is None
        assert updated.filename == test_file.filename


class TestDeleteFile:

    async def test_delete_cascades_to_comments(self, gateway, test_user, test_file):
        for text in ("first", "second"):
            await gateway.comments.create_comment(
                CommentCreate(file_id=test_file.id, user_id=test_user.id, content=text)
            )

        await gateway.files.delete_file(test_file.id)

        assert await gateway.files.get_file_by_id(test_file.id) is None
        assert await gateway.comments.get_comments_by_file_id(test_file.id) == []

    async def test_delete_keeps_other_files_comments(self, gateway, test_user, test_file):
        other = await gateway.files.create_file(file_payload(test_user.id, "other.txt"))
        kept = await gateway.comments.create_comment(
            CommentCreate(file_id=other.id, user_id=test_user.id, content="keep me")
        )

        await gateway.files.delete_file(test_file.id)

        assert await gateway.comments.get_comment_by_id(kept.id) == kept

    async def test_delete_missing_file_succeeds(self, gateway):
        await gateway.files.delete_file(404)
