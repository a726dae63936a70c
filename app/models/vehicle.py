# app/models/vehicle.py
"""
Vehicle inventory table. Each vehicle belongs to exactly one garage.
Fuel type and condition are closed sets enforced by CHECK constraints.
"""

import enum

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text
from app.database import Base
from app.models.mixins import IdMixin, TimestampMixin


class FuelType(str, enum.Enum):
    GASOLINE = "gasoline"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    HYBRID = "hybrid"
    LPG = "lpg"


class VehicleCondition(str, enum.Enum):
    NEW = "new"
    USED = "used"
    RECONDITIONED = "reconditioned"


FUEL_VALUES = tuple(f.value for f in FuelType)
CONDITION_VALUES = tuple(c.value for c in VehicleCondition)


class Vehicle(IdMixin, TimestampMixin, Base):
    __tablename__ = "vehicles"
    __table_args__ = (
        CheckConstraint(f"fuel_type IN {FUEL_VALUES!r}", name="ck_vehicles_fuel_type"),
        CheckConstraint(f"condition IN {CONDITION_VALUES!r}", name="ck_vehicles_condition"),
    )

    garage_id = Column(String(36), ForeignKey("garages.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    mileage = Column(Integer, default=0)
    fuel_type = Column(String(20), nullable=False)
    condition = Column(String(20), nullable=False)
    is_available = Column(Boolean, default=True, nullable=False, index=True)
    color = Column(String(50))
    description = Column(Text)
    image_url = Column(Text)

    def __repr__(self):
        return f"<Vehicle {self.id} {self.make} {self.model} garage={self.garage_id}>"
