# app/models/profile.py
"""
Profiles table: one row per identity (unique user_id).
garage_id decides the tenant scope of the identity; NULL means unassigned.
Deleting the garage keeps the profile and clears garage_id.
"""

from sqlalchemy import Column, ForeignKey, String
from app.database import Base
from app.models.mixins import IdMixin, TimestampMixin


class Profile(IdMixin, TimestampMixin, Base):
    __tablename__ = "profiles"

    user_id = Column(String(36), ForeignKey("identities.id", ondelete="CASCADE"),
                     unique=True, nullable=False, index=True)
    last_name = Column(String(100), nullable=False)
    first_name = Column(String(100), nullable=False)
    email = Column(String(200))
    phone = Column(String(50))
    garage_id = Column(String(36), ForeignKey("garages.id", ondelete="SET NULL"), index=True)

    def __repr__(self):
        return f"<Profile {self.id} user={self.user_id} garage={self.garage_id}>"
