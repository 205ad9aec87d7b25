from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from train_api.auth.utils import create_access_token, get_password_hash
from train_api.database import Base, get_db
from train_api.main import app
from train_api.models import Booking, Station, Trip, User
from train_api.payments.processor import PaymentProcessor, get_payment_processor
from train_api.utils import generate_id, utcnow


class StubPaymentProcessor(PaymentProcessor):
    """Deterministic processor that records every charge it sees"""

    def __init__(self, outcome: bool = True, error: Exception = None):
        self.outcome = outcome
        self.error = error
        self.calls = []

    def process(self, source, amount, currency):
        self.calls.append((source, amount, currency))
        if self.error is not None:
            raise self.error
        return self.outcome


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(engine):
    # objects stay readable after commit; call expire_all() before re-reading API writes
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def payment_processor():
    return StubPaymentProcessor(outcome=True)


@pytest.fixture
def client(session_factory, payment_processor):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_processor] = lambda: payment_processor
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_station(db_session):
    """Station factory; every call adds a new committed station"""

    def _factory(
        name: str = "Berlin Hauptbahnhof",
        address: str = "Invalidenstraße 10557 Berlin, Germany",
        country_code: str = "DE",
        timezone: str = "Europe/Berlin",
    ) -> Station:
        station = Station(
            id=generate_id(),
            name=name,
            address=address,
            country_code=country_code,
            timezone=timezone,
        )
        db_session.add(station)
        db_session.commit()
        return station

    return _factory


@pytest.fixture
def origin(create_station):
    return create_station()


@pytest.fixture
def destination(create_station):
    return create_station(
        name="Paris Gare du Nord",
        address="18 Rue de Dunkerque 75010 Paris, France",
        country_code="FR",
        timezone="Europe/Paris",
    )


@pytest.fixture
def create_trip(db_session, origin, destination):
    def _factory(
        departure_time: datetime = datetime(2024, 2, 1, 8, 0),
        duration: timedelta = timedelta(hours=6),
        price: Decimal = Decimal("50.00"),
        bicycles_allowed: bool = True,
        dogs_allowed: bool = True,
        operator: str = "Deutsche Bahn",
        origin_station: Station = None,
        destination_station: Station = None,
    ) -> Trip:
        trip = Trip(
            id=generate_id(),
            origin_id=(origin_station or origin).id,
            destination_id=(destination_station or destination).id,
            departure_time=departure_time,
            arrival_time=departure_time + duration,
            operator=operator,
            price=price,
            bicycles_allowed=bicycles_allowed,
            dogs_allowed=dogs_allowed,
        )
        db_session.add(trip)
        db_session.commit()
        return trip

    return _factory


@pytest.fixture
def trip(create_trip):
    return create_trip()


@pytest.fixture
def create_user(db_session):
    def _factory(name: str = "Test User", email: str = None, password: str = "password123") -> User:
        user = User(
            id=generate_id(),
            name=name,
            email=email or f"{generate_id()}@example.com",
            password=get_password_hash(password),
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _factory


@pytest.fixture
def user(create_user):
    return create_user()


@pytest.fixture
def other_user(create_user):
    return create_user(name="Someone Else")


@pytest.fixture
def make_auth_headers():
    def _factory(user: User, scope: str = "bookings:read bookings:write") -> dict:
        token = create_access_token(data={"sub": user.id, "scope": scope})
        return {"Authorization": f"Bearer {token}"}

    return _factory


@pytest.fixture
def auth_headers(make_auth_headers, user):
    return make_auth_headers(user)


@pytest.fixture
def create_booking(db_session, trip, user):
    """Insert a booking directly, bypassing the API checks"""

    def _factory(
        owner: User = None,
        booking_trip: Trip = None,
        status: str = "pending",
        created_at: datetime = None,
        hold: timedelta = timedelta(hours=1),
        passenger_name: str = "Ada Lovelace",
    ) -> Booking:
        created_at = created_at or utcnow()
        booking = Booking(
            id=generate_id(),
            trip_id=(booking_trip or trip).id,
            user_id=(owner or user).id,
            passenger_name=passenger_name,
            has_bicycle=False,
            has_dog=False,
            status=status,
            created_at=created_at,
            expires_at=created_at + hold,
        )
        db_session.add(booking)
        db_session.commit()
        return booking

    return _factory


@pytest.fixture
def card_source():
    return {
        "object": "card",
        "name": "Ada Lovelace",
        "number": "4242424242424242",
        "cvc": "123",
        "exp_month": 12,
        "exp_year": utcnow().year + 2,
        "address_line1": "1 Main Street",
        "address_country": "GB",
        "address_post_code": "N1 9GU",
    }


@pytest.fixture
def bank_source():
    return {
        "object": "bank_account",
        "name": "Ada Lovelace",
        "number": "12345678",
        "sort_code": "401276",
        "account_type": "individual",
        "bank_name": "Example Bank",
        "country": "GB",
    }
