# app/models/sale.py
"""
Sales table. A sale references one vehicle, one client, one employee profile
and one garage.

The vehicle / client / employee foreign keys use the default NO ACTION rule:
deleting a referenced row fails while the sale exists, but the check runs at
the end of the statement, so a garage delete that cascades to both the sale
and its vehicle still goes through.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.mixins import CreatedMixin, IdMixin


class Sale(IdMixin, CreatedMixin, Base):
    __tablename__ = "sales"

    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    employee_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    garage_id = Column(String(36), ForeignKey("garages.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    sale_price = Column(Numeric(10, 2), nullable=False)
    sale_date = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    notes = Column(Text)

    vehicle = relationship("Vehicle", lazy="joined")
    client = relationship("Client", lazy="joined")
    employee = relationship("Profile", lazy="joined")

    def __repr__(self):
        return f"<Sale {self.id} vehicle={self.vehicle_id} price={self.sale_price}>"
