"""
UserService tests
"""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from schemas.users import UserCreate, UserUpdate


class TestCreateUser:

    async def test_create_then_get_returns_same_record(self, gateway):
        created = await gateway.users.create_user(
            UserCreate(external_id="g-1", email="alice@example.com", name="Alice")
        )

        fetched = await gateway.users.get_user_by_id(created.id)

        assert fetched == created
        assert created.is_admin is False
        assert created.is_active is True
        assert created.created_at is not None
        assert created.last_login is not None

    async def test_admin_flag_is_stored(self, gateway):
        created = await gateway.users.create_user(
            UserCreate(email="root@example.com", name="Root", is_admin=True)
        )

        assert created.is_admin is True

    async def test_duplicate_email_fails_without_partial_row(self, gateway):
        await gateway.users.create_user(UserCreate(email="dup@example.com", name="First"))

        with pytest.raises(IntegrityError):
            await gateway.users.create_user(UserCreate(email="dup@example.com", name="Second"))

        users = await gateway.users.get_all_users()
        assert [u.name for u in users] == ["First"]

    async def test_duplicate_external_id_fails(self, gateway, test_user):
        with pytest.raises(IntegrityError):
            await gateway.users.create_user(
                UserCreate(external_id=test_user.external_id, email="other@example.com", name="Other")
            )

    async def test_users_without_external_id_coexist(self, gateway):
        await gateway.users.create_user(UserCreate(email="one@example.com", name="One"))
        await gateway.users.create_user(UserCreate(email="two@example.com", name="Two"))

        assert len(await gateway.users.get_all_users()) == 2

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            UserCreate(email="not-an-email", name="Broken")


class TestLookups:

    async def test_get_by_external_id(self, gateway, test_user):
        user = await gateway.users.get_user_by_external_id("google-123")

        assert user.id == test_user.id

    async def test_get_by_email(self, gateway, test_user):
        user = await gateway.users.get_user_by_email("owner@example.com")

        assert user.id == test_user.id

    async def test_missing_rows_resolve_to_none(self, gateway):
        assert await gateway.users.get_user_by_id(999) is None
        assert await gateway.users.get_user_by_external_id("nope") is None
        assert await gateway.users.get_user_by_email("nobody@example.com") is None

    async def test_get_by_email_matches_normalized_domain(self, gateway):
        created = await gateway.users.create_user(UserCreate(email="Alice@Example.COM", name="Alice"))

        assert created.email == "Alice@example.com"
        assert (await gateway.users.get_user_by_email("Alice@Example.COM")).id == created.id
        assert (await gateway.users.get_user_by_email("Alice@example.com")).id == created.id

    async def test_get_by_invalid_email_returns_none(self, gateway, test_user):
        assert await gateway.users.get_user_by_email("not-an-email") is None


class TestUpdateUser:

    async def test_updates_only_given_fields(self, gateway, test_user):
        updated = await gateway.users.update_user(
            test_user.id, UserUpdate(name="Renamed", is_active=False)
        )

        assert updated.name == "Renamed"
        assert updated.is_active is False
        assert updated.email == test_user.email
        assert updated.picture == test_user.picture
        assert updated.created_at == test_user.created_at

    async def test_unknown_field_rejected_before_sql(self):
        with pytest.raises(ValidationError):
            UserUpdate(**{"name": "x", "password_hash": "y"})

    def test_null_for_required_column_rejected(self):
        for field in ("name", "email", "is_admin", "is_active"):
            with pytest.raises(ValidationError):
                UserUpdate(**{field: None})

    async def test_null_clears_optional_column(self, gateway, test_user):
        updated = await gateway.users.update_user(test_user.id, UserUpdate(picture=None))

        assert updated.picture is None
        assert updated.name == test_user.name

    async def test_missing_user_returns_none(self, gateway):
        assert await gateway.users.update_user(999, UserUpdate(name="Ghost")) is None

    async def test_empty_patch_returns_current_row(self, gateway, test_user):
        assert await gateway.users.update_user(test_user.id, UserUpdate()) == test_user

    async def test_duplicate_email_on_update_fails(self, gateway, test_user):
        other = await gateway.users.create_user(UserCreate(email="b@example.com", name="B"))

        with pytest.raises(IntegrityError):
            await gateway.users.update_user(other.id, UserUpdate(email=test_user.email))

        assert (await gateway.users.get_user_by_id(other.id)).email == "b@example.com"

    async def test_record_login_advances_last_login(self, gateway, test_user):
        updated = await gateway.users.record_login(test_user.id)

        assert updated.last_login > test_user.last_login


class TestListAndDelete:

    async def test_get_all_users_newest_first(self, gateway):
        for name in ("First", "Second", "Third"):
            await gateway.users.create_user(UserCreate(email=f"{name.lower()}@example.com", name=name))

        users = await gateway.users.get_all_users()

        assert [u.name for u in users] == ["Third", "Second", "First"]

    async def test_get_all_users_omits_external_id(self, gateway, test_user):
        users = await gateway.users.get_all_users()

        assert "external_id" not in users[0].model_dump()
        assert set(users[0].model_dump()) == {
            "id", "email", "name", "picture", "is_admin", "is_active", "created_at", "last_login"
        }

    async def test_delete_user(self, gateway, test_user):
        await gateway.users.delete_user(test_user.id)

        assert await gateway.users.get_user_by_id(test_user.id) is None

    async def test_delete_missing_user_succeeds(self, gateway):
        await gateway.users.delete_user(999)
