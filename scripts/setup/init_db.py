"""
Initialize database: creates all tables, optionally bootstraps the first admin.
Run once before first launch, or after adding new models.
Usage:
  python scripts/setup/init_db.py
  python scripts/setup/init_db.py --admin-email boss@example.com --garage-name "Central Garage"
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import SessionLocal, create_tables, engine
from app.config import settings
from app.exceptions import ConstraintViolation
from app.models.garage import Garage
from app.models.identity import Identity
from app.models.profile import Profile
from app.models.user_role import AppRole, UserRole
from app.services import identity_service
from sqlalchemy import inspect, text


def bootstrap_admin(email: str, garage_name: str = None):
    """
    Create (or reuse) an identity and grant it the admin role. Admin rights
    cannot be granted through the API by a non-admin, so the first one is
    seeded here with direct table access.
    """
    db = SessionLocal()
    try:
        identity = db.query(Identity).filter(Identity.email == email).first()
        if identity is None:
            identity = identity_service.create_identity(db, email, {"first_name": "Admin"})
            print(f"Identity created: {identity.id}")
        else:
            print(f"Identity exists:  {identity.id}")

        has_admin = db.query(UserRole).filter(
            UserRole.user_id == identity.id, UserRole.role == AppRole.ADMIN.value
        ).first()
        if not has_admin:
            db.add(UserRole(user_id=identity.id, role=AppRole.ADMIN.value))
            db.commit()
        print(f"Admin role granted to {email}")

        if garage_name:
            garage = Garage(name=garage_name)
            db.add(garage)
            db.flush()
            profile = db.query(Profile).filter(Profile.user_id == identity.id).one()
            profile.garage_id = garage.id
            db.commit()
            print(f"Garage '{garage_name}' created ({garage.id}) and assigned to {email}")
        print(f"\nCall the API with header {settings.CALLER_HEADER}: {identity.id}")
    except ConstraintViolation as e:
        print(f"Could not bootstrap admin: {e}")
        sys.exit(1)
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create tables and bootstrap the first admin")
    parser.add_argument("--admin-email", help="Email of the identity to make admin")
    parser.add_argument("--garage-name", help="Also create a garage and assign the admin to it")
    args = parser.parse_args()

    print("Garage DB Initialization")
    print("=" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    # Test connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except Exception as e:
        print(f"Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\nCreating tables...")
    create_tables()

    tables = sorted(inspect(engine).get_table_names())
    print(f"\nTables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    if args.admin_email:
        print()
        bootstrap_admin(args.admin_email, args.garage_name)

    print("\nDatabase ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
