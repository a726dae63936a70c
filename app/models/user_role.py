# app/models/user_role.py
"""
Role assignments. An identity may hold several roles; (user_id, role) is unique.
The admin role is not scoped to a garage.
"""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, UniqueConstraint
from app.database import Base
from app.models.mixins import IdMixin


class AppRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


ROLE_VALUES = tuple(r.value for r in AppRole)


class UserRole(IdMixin, Base):
    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
        CheckConstraint(f"role IN {ROLE_VALUES!r}", name="ck_user_roles_role"),
    )

    user_id = Column(String(36), ForeignKey("identities.id", ondelete="CASCADE"),
                     nullable=False, index=True)
    role = Column(String(20), nullable=False, default=AppRole.EMPLOYEE.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<UserRole {self.user_id} role={self.role}>"
