# app/models/client.py
"""Garage clients (buyers). Each client belongs to exactly one garage."""

from sqlalchemy import Column, ForeignKey, String, Text
from app.database import Base
from app.models.mixins import IdMixin, TimestampMixin


class Client(IdMixin, TimestampMixin, Base):
    __tablename__ = "clients"

    garage_id = Column(String(36), ForeignKey("garages.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    last_name = Column(String(100), nullable=False)
    first_name = Column(String(100), nullable=False)
    email = Column(String(200))
    phone = Column(String(50))
    address = Column(Text)

    def __repr__(self):
        return f"<Client {self.id} {self.first_name} {self.last_name}>"
