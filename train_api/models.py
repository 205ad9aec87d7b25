from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, Numeric, CheckConstraint, Index, text
from sqlalchemy.orm import relationship

from train_api.database import Base
from train_api.utils import generate_id, utcnow

# ================================
# Users
# ================================
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    bookings = relationship("Booking", back_populates="user")

# ================================
# Stations & Trips (reference data)
# ================================
class Station(Base):
    __tablename__ = "stations"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    address = Column(String(500), nullable=False)
    country_code = Column(String(2), nullable=False, index=True)
    timezone = Column(String(64), nullable=False)

    # Relationships
    departures = relationship("Trip", foreign_keys="Trip.origin_id", back_populates="origin")
    arrivals = relationship("Trip", foreign_keys="Trip.destination_id", back_populates="destination")


class Trip(Base):
    __tablename__ = "trips"
    __table_args__ = (
        CheckConstraint("arrival_time > departure_time", name="ck_trips_arrival_after_departure"),
        CheckConstraint("price > 0", name="ck_trips_price_positive"),
        Index("ix_trips_route_departure", "origin_id", "destination_id", "departure_time"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    origin_id = Column(String(36), ForeignKey("stations.id"), nullable=False)
    destination_id = Column(String(36), ForeignKey("stations.id"), nullable=False)
    departure_time = Column(DateTime, nullable=False)
    arrival_time = Column(DateTime, nullable=False)
    operator = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    bicycles_allowed = Column(Boolean, nullable=False, default=False)
    dogs_allowed = Column(Boolean, nullable=False, default=False)

    # Relationships
    origin = relationship("Station", foreign_keys=[origin_id], back_populates="departures")
    destination = relationship("Station", foreign_keys=[destination_id], back_populates="arrivals")
    bookings = relationship("Booking", back_populates="trip")

# ================================
# Bookings & Payments
# ================================
class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_id)
    trip_id = Column(String(36), ForeignKey("trips.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    passenger_name = Column(String(255), nullable=False)
    has_bicycle = Column(Boolean, nullable=False, default=False)
    has_dog = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="pending")
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    trip = relationship("Trip", back_populates="bookings")
    user = relationship("User", back_populates="bookings")
    payments = relationship("Payment", back_populates="booking", cascade="all, delete-orphan")


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        # one succeeded payment per booking, enforced by the store itself
        Index(
            "uq_payments_booking_succeeded",
            "booking_id",
            unique=True,
            sqlite_where=text("status = 'succeeded'"),
            postgresql_where=text("status = 'succeeded'"),
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    booking_id = Column(String(36), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    source_type = Column(String(20), nullable=False)
    source_details = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    booking = relationship("Booking", back_populates="payments")
