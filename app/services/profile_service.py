# app/services/profile_service.py
"""
Profiles: every identity reads and edits its own; admins manage all of them,
including garage assignment. Profiles are normally created by the identity
sign-up hook, direct creation is an admin operation bound by the one-profile-
per-identity constraint.
"""

from typing import List, Optional

from sqlalchemy.orm import Session
from app.exceptions import NotFound
from app.models.profile import Profile
from app.services.access_control import CallerContext, Entity, visible
from app.services.records import create_record, delete_record, get_visible, update_record


def list_profiles(db: Session, caller: CallerContext, garage_id: Optional[str] = None) -> List[Profile]:
    q = visible(db.query(Profile), Entity.PROFILE, Profile, caller)
    if garage_id:
        q = q.filter(Profile.garage_id == garage_id)
    return q.order_by(Profile.last_name, Profile.first_name).all()


def get_profile(db: Session, caller: CallerContext, profile_id: str) -> Profile:
    return get_visible(db, Profile, Entity.PROFILE, caller, profile_id)


def get_own_profile(db: Session, caller: CallerContext) -> Profile:
    profile = db.query(Profile).filter(Profile.user_id == caller.user_id).first()
    if profile is None:
        raise NotFound(f"No profile for identity {caller.user_id}")
    return profile


def create_profile(db: Session, caller: CallerContext, values: dict) -> Profile:
    return create_record(db, caller, Entity.PROFILE, Profile, values)


def update_profile(db: Session, caller: CallerContext, profile_id: str, changes: dict) -> Profile:
    profile = get_profile(db, caller, profile_id)
    return update_record(db, caller, Entity.PROFILE, profile, changes)


def delete_profile(db: Session, caller: CallerContext, profile_id: str):
    profile = get_profile(db, caller, profile_id)
    delete_record(db, caller, Entity.PROFILE, profile)
