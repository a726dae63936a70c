# app/models/garage.py
"""
Garages table, the tenant unit.
Every vehicle, client and sale belongs to exactly one garage; deleting a
garage cascades to them at the database level.
"""

from sqlalchemy import Column, String, Text
from app.database import Base
from app.models.mixins import IdMixin, TimestampMixin


class Garage(IdMixin, TimestampMixin, Base):
    __tablename__ = "garages"

    name = Column(String(200), nullable=False)
    address = Column(Text)
    phone = Column(String(50))
    email = Column(String(200))

    def __repr__(self):
        return f"<Garage {self.id} name={self.name}>"
