# Garage management database models
# Import all models here for SQLAlchemy discovery

from app.models.garage import Garage                   # noqa
from app.models.profile import Profile                 # noqa
from app.models.user_role import AppRole, UserRole     # noqa
from app.models.identity import Identity               # noqa
from app.models.vehicle import FuelType, Vehicle, VehicleCondition  # noqa
from app.models.client import Client                   # noqa
from app.models.sale import Sale                       # noqa
