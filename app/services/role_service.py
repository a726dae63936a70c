# app/services/role_service.py
"""Role assignments: identities read their own, admins grant and revoke."""

from typing import List, Optional

from sqlalchemy.orm import Session
from app.models.user_role import AppRole, UserRole
from app.services.access_control import CallerContext, Entity, visible
from app.services.records import create_record, delete_record, get_visible


def list_roles(db: Session, caller: CallerContext, user_id: Optional[str] = None) -> List[UserRole]:
    q = visible(db.query(UserRole), Entity.USER_ROLE, UserRole, caller)
    if user_id:
        q = q.filter(UserRole.user_id == user_id)
    return q.order_by(UserRole.created_at).all()


def grant_role(db: Session, caller: CallerContext, user_id: str, role: AppRole) -> UserRole:
    return create_record(db, caller, Entity.USER_ROLE, UserRole,
                         {"user_id": user_id, "role": AppRole(role).value})


def revoke_role(db: Session, caller: CallerContext, assignment_id: str):
    assignment = get_visible(db, UserRole, Entity.USER_ROLE, caller, assignment_id)
    delete_record(db, caller, Entity.USER_ROLE, assignment)
