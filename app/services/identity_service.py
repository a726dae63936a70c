# app/services/identity_service.py
"""
Identity creation and caller resolution.

create_identity() is what the auth provider calls on sign-up: the profile and
the default employee role are written by the Identity after_insert hook, in
the same transaction as the identity row.

load_caller_context() resolves an identity id into the CallerContext that the
access rules consume.
"""

from typing import Optional

from sqlalchemy.orm import Session
from app.database import commit
from app.exceptions import NotFound
from app.models.identity import Identity
from app.models.mixins import new_id
from app.models.profile import Profile
from app.models.user_role import UserRole
from app.services.access_control import CallerContext
from app.utils.logger import get_logger

logger = get_logger(__name__)


def create_identity(db: Session, email: str, metadata: Optional[dict] = None) -> Identity:
    identity = Identity(id=new_id(), email=email, raw_metadata=dict(metadata or {}))
    db.add(identity)
    commit(db)
    db.refresh(identity)
    logger.info(f"Identity created: {identity.id} ({email}) with default employee role")
    return identity


def get_identity(db: Session, user_id: str) -> Optional[Identity]:
    return db.query(Identity).filter(Identity.id == user_id).first()


def load_caller_context(db: Session, user_id: str) -> CallerContext:
    """Raises NotFound for an unknown identity. A missing profile yields no garage."""
    if get_identity(db, user_id) is None:
        raise NotFound(f"Identity {user_id} not found")
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    roles = [r.role for r in db.query(UserRole).filter(UserRole.user_id == user_id).all()]
    return CallerContext.build(
        user_id=user_id,
        garage_id=profile.garage_id if profile else None,
        roles=roles,
    )
