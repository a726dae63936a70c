# app/services/report_service.py
"""
Dashboard and sales statistics.
Built on the same visibility filter as the list endpoints, so a garage member
only ever aggregates its own garage and an admin aggregates everything.
"""

from collections import OrderedDict
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session
from app.config import settings
from app.models.client import Client
from app.models.sale import Sale
from app.models.vehicle import Vehicle
from app.services.access_control import CallerContext, Entity, visible
from app.services.sale_service import list_sales, present_sale, visible_parties


def get_dashboard(db: Session, caller: CallerContext) -> dict:
    vehicles = visible(db.query(Vehicle), Entity.VEHICLE, Vehicle, caller)
    clients = visible(db.query(Client), Entity.CLIENT, Client, caller)
    sales = visible(db.query(Sale), Entity.SALE, Sale, caller)
    revenue = visible(
        db.query(func.coalesce(func.sum(Sale.sale_price), 0)), Entity.SALE, Sale, caller
    ).scalar()
    return {
        "total_vehicles": vehicles.count(),
        "available_vehicles": vehicles.filter(Vehicle.is_available.is_(True)).count(),
        "total_clients": clients.count(),
        "total_sales": sales.count(),
        "revenue": Decimal(revenue or 0),
        "recent_sales": [
            present_sale(caller, s) for s in list_sales(db, caller, limit=settings.RECENT_SALES_LIMIT)
        ],
    }


def get_sales_statistics(db: Session, caller: CallerContext, months: int = None) -> dict:
    """
    Totals plus two breakdowns: per calendar month (last `months` months that
    had sales, oldest first) and per fuel type of the sold vehicle.
    """
    months = months or settings.STATS_MONTHS
    sales = visible(db.query(Sale), Entity.SALE, Sale, caller).order_by(Sale.sale_date).all()

    total = len(sales)
    revenue = sum((Decimal(s.sale_price) for s in sales), Decimal("0"))

    by_month = OrderedDict()
    by_fuel = {}
    for sale in sales:
        key = sale.sale_date.strftime("%Y-%m")
        bucket = by_month.setdefault(key, {"month": key, "sales": 0, "amount": Decimal("0")})
        bucket["sales"] += 1
        bucket["amount"] += Decimal(sale.sale_price)

        vehicle = visible_parties(caller, sale)["vehicle"]
        fuel = vehicle.fuel_type if vehicle else "unknown"
        by_fuel[fuel] = by_fuel.get(fuel, 0) + 1

    return {
        "total_sales": total,
        "revenue": revenue,
        "average_price": (revenue / total).quantize(Decimal("0.01")) if total else Decimal("0"),
        "sales_by_month": list(by_month.values())[-months:],
        "sales_by_fuel_type": [{"fuel_type": k, "sales": v} for k, v in sorted(by_fuel.items())],
    }
