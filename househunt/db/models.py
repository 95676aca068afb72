# househunt/db/models.py

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from househunt.core.permissions import ROLE_OWNER, STATUS_APPROVED, STATUS_PENDING
from househunt.db.base import Base

PROPERTY_TYPES = ("apartment", "house", "villa")

BOOKING_PENDING = "pending"
BOOKING_ACCEPTED = "accepted"
BOOKING_REJECTED = "rejected"
BOOKING_STATUSES = (BOOKING_PENDING, BOOKING_ACCEPTED, BOOKING_REJECTED)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def initial_status_for_role(role: str) -> str:
    """Owners wait for an admin; everybody else is approved on creation."""
    return STATUS_PENDING if role == ROLE_OWNER else STATUS_APPROVED


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # stored lowercased + trimmed
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(32), unique=True, nullable=True)

    # DB column name: password_hash
    hashed_password = Column("password_hash", String(255), nullable=False)

    # role never changes after registration
    role = Column(String(20), nullable=False, default="renter")
    # nullable only for legacy rows; login backfills it
    status = Column(String(20), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    properties = relationship("Property", back_populates="owner")

    __table_args__ = (Index("ix_users_role_status", "role", "status"),)


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)

    # set from the caller's token at creation, never reassigned
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    rent = Column(Float, nullable=False)
    location = Column(String(255), nullable=False)

    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    size = Column(Float, nullable=True)  # sq-ft
    furnished = Column(Boolean, nullable=False, default=False)
    type = Column(String(20), nullable=False, default="apartment")

    image_url = Column(String(512), nullable=False, default="")

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="properties")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    # SET NULL, not CASCADE: a booking outlives its property and owner
    property_id = Column(
        Integer,
        ForeignKey("properties.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # snapshot of Property.owner_id at request time
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    renter_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # snapshot of Property.title at request time; may go stale
    property_title = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=BOOKING_PENDING)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
