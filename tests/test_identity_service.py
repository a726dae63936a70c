# tests/test_identity_service.py
"""Identity sign-up side effect and caller resolution."""

import pytest
from sqlalchemy.exc import IntegrityError
from unittest.mock import MagicMock
from app.exceptions import ConstraintViolation, NotFound
from app.models.profile import Profile
from app.models.user_role import AppRole, UserRole
from app.services.access_control import CallerContext
from app.services.identity_service import create_identity, load_caller_context


class TestCreateIdentity:
    def test_creates_exactly_one_profile_and_employee_role(self, db):
        identity = create_identity(db, "jane@example.com")

        profiles = db.query(Profile).filter(Profile.user_id == identity.id).all()
        roles = db.query(UserRole).filter(UserRole.user_id == identity.id).all()
        assert len(profiles) == 1
        assert [r.role for r in roles] == [AppRole.EMPLOYEE.value]

    def test_placeholder_names_and_copied_email(self, db):
        identity = create_identity(db, "anon@example.com")
        profile = db.query(Profile).filter(Profile.user_id == identity.id).one()
        assert profile.last_name == "New"
        assert profile.first_name == "User"
        assert profile.email == "anon@example.com"
        assert profile.garage_id is None

    def test_names_taken_from_metadata(self, db):
        identity = create_identity(db, "paul@example.com", {"first_name": "Paul", "last_name": "Durand"})
        profile = db.query(Profile).filter(Profile.user_id == identity.id).one()
        assert (profile.first_name, profile.last_name) == ("Paul", "Durand")

    def test_second_profile_for_same_identity_fails_uniqueness(self, db):
        identity = create_identity(db, "dup@example.com")
        db.add(Profile(user_id=identity.id, last_name="Other", first_name="Profile"))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()
        assert db.query(Profile).filter(Profile.user_id == identity.id).count() == 1

    def test_duplicate_email_rejected_atomically(self, db):
        create_identity(db, "same@example.com")
        with pytest.raises(ConstraintViolation):
            create_identity(db, "same@example.com")
        assert db.query(Profile).filter(Profile.email == "same@example.com").count() == 1


class TestLoadCallerContext:
    def test_resolves_garage_and_roles(self, db, world):
        caller = load_caller_context(db, world.manager_a.user_id)
        assert caller.garage_id == world.garage_a
        assert caller.roles == frozenset({AppRole.MANAGER, AppRole.EMPLOYEE})
        assert not caller.is_admin

    def test_admin_flag(self, world):
        assert world.admin.is_admin
        assert world.admin.garage_id is None

    def test_unknown_identity(self, db):
        with pytest.raises(NotFound):
            load_caller_context(db, "does-not-exist")

    def test_identity_without_profile_has_no_garage(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.first.side_effect = [MagicMock(), None]
        db.query.return_value.filter.return_value.all.return_value = []

        caller = load_caller_context(db, "u-1")

        assert caller == CallerContext(user_id="u-1", garage_id=None, roles=frozenset())
