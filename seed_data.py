#!/usr/bin/env python3

from datetime import timedelta
from decimal import Decimal

from train_api.auth.utils import get_password_hash
from train_api.database import SessionLocal, init_db
from train_api.models import Booking, Payment, Station, Trip, User
from train_api.utils import generate_id, utcnow

BERLIN_ID = "efdbb9d1-02c2-4bc3-afb7-6788d8782b1e"
PARIS_ID = "b2e783e1-c824-4d63-b37a-d8d698862f1d"


def create_seed_data():
    init_db()
    db = SessionLocal()

    try:
        print("🚀 Creating seed data for the Train Booking API...")

        # Clear existing data (in reverse dependency order)
        print("Clearing existing data...")
        db.query(Payment).delete()
        db.query(Booking).delete()
        db.query(Trip).delete()
        db.query(Station).delete()
        db.query(User).delete()

        # 1. Create Stations
        print("Creating stations...")
        stations = [
            Station(
                id=BERLIN_ID,
                name="Berlin Hauptbahnhof",
                address="Invalidenstraße 10557 Berlin, Germany",
                country_code="DE",
                timezone="Europe/Berlin",
            ),
            Station(
                id=PARIS_ID,
                name="Paris Gare du Nord",
                address="18 Rue de Dunkerque 75010 Paris, France",
                country_code="FR",
                timezone="Europe/Paris",
            ),
            Station(
                id=generate_id(),
                name="Amsterdam Centraal",
                address="Stationsplein 1012 AB Amsterdam, Netherlands",
                country_code="NL",
                timezone="Europe/Amsterdam",
            ),
            Station(
                id=generate_id(),
                name="Brussels Central",
                address="Carrefour de l'Europe 1000 Brussels, Belgium",
                country_code="BE",
                timezone="Europe/Brussels",
            ),
        ]
        db.add_all(stations)
        db.flush()

        berlin, paris = stations[0], stations[1]

        # 2. Create Trips (every two hours tomorrow, both directions)
        print("Creating trips...")
        tomorrow = (utcnow() + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)

        trips = []
        for hour in range(6, 21, 2):
            departure_time = tomorrow + timedelta(hours=hour)
            price = Decimal(50 + hour * 2)

            trips.append(Trip(
                origin_id=berlin.id,
                destination_id=paris.id,
                departure_time=departure_time,
                arrival_time=departure_time + timedelta(hours=6),
                operator="Deutsche Bahn" if hour % 4 == 0 else "SNCF",
                price=price,
                bicycles_allowed=hour % 3 != 0,
                dogs_allowed=True,
            ))

            return_departure = departure_time + timedelta(hours=1, minutes=30)
            trips.append(Trip(
                origin_id=paris.id,
                destination_id=berlin.id,
                departure_time=return_departure,
                arrival_time=return_departure + timedelta(hours=6),
                operator="SNCF" if hour % 4 == 0 else "Deutsche Bahn",
                price=price,
                bicycles_allowed=hour % 3 != 0,
                dogs_allowed=hour % 2 == 0,
            ))

        db.add_all(trips)

        # 3. Create a test user
        print("Creating test user...")
        test_user = User(
            name="Test User",
            email="test@example.com",
            password=get_password_hash("password123"),
        )
        db.add(test_user)

        # Commit all changes
        db.commit()
        print("✅ Successfully created seed data!")
        print("Created:")
        print(f"  - {len(stations)} stations")
        print(f"  - {len(trips)} trips")
        print(f"  - 1 test user ({test_user.email} / password123)")

    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    create_seed_data()
