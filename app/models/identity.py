# app/models/identity.py
"""
Authenticated identities (the auth provider's user table).

Inserting an identity also inserts its profile and the default employee role
in the same transaction, see handle_new_identity below. There is no other
code path that creates the default profile.
"""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, String, event
from app.config import settings
from app.database import Base
from app.models.mixins import IdMixin, new_id
from app.models.profile import Profile
from app.models.user_role import AppRole, UserRole


class Identity(IdMixin, Base):
    __tablename__ = "identities"

    email = Column(String(200), unique=True, nullable=False, index=True)
    raw_metadata = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Identity {self.id} email={self.email}>"


@event.listens_for(Identity, "after_insert")
def handle_new_identity(mapper, connection, target):
    metadata = target.raw_metadata or {}
    now = datetime.utcnow()
    connection.execute(
        Profile.__table__.insert().values(
            id=new_id(),
            user_id=target.id,
            last_name=metadata.get("last_name") or settings.DEFAULT_LAST_NAME,
            first_name=metadata.get("first_name") or settings.DEFAULT_FIRST_NAME,
            email=target.email,
            created_at=now,
            updated_at=now,
        )
    )
    connection.execute(
        UserRole.__table__.insert().values(
            id=new_id(), user_id=target.id, role=AppRole.EMPLOYEE.value, created_at=now,
        )
    )
