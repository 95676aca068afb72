# househunt/db/crud_bookings.py

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from househunt.db.models import BOOKING_PENDING, Booking, Property, User


async def create_booking(
    db: AsyncSession,
    *,
    renter_id: int,
    prop: Property,
    message: Optional[str] = None,
) -> Booking:
    """
    owner_id and property_title are copied from `prop` now and never
    re-derived. Status always starts pending.
    """
    booking = Booking(
        renter_id=renter_id,
        property_id=prop.id,
        owner_id=prop.owner_id,
        property_title=prop.title,
        message=message,
        status=BOOKING_PENDING,
    )
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    return booking


async def list_bookings_for_renter(db: AsyncSession, renter_id: int) -> List[Dict[str, Any]]:
    """
    Renter dashboard rows, newest first. Outer joins: a booking whose
    property or owner is gone still shows up, with None in those columns.
    """
    owner = aliased(User)
    stmt = (
        select(
            Booking,
            Property.title,
            Property.location,
            owner.name,
            owner.email,
            owner.phone,
        )
        .outerjoin(Property, Booking.property_id == Property.id)
        .outerjoin(owner, Booking.owner_id == owner.id)
        .where(Booking.renter_id == renter_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return [
        {
            "id": b.id,
            "propertyId": b.property_id,
            "propertyTitle": title,
            "propertyLocation": location,
            "ownerName": owner_name,
            "ownerEmail": owner_email,
            "ownerPhone": owner_phone,
            "message": b.message,
            "status": b.status,
            "createdAt": b.created_at,
        }
        for b, title, location, owner_name, owner_email, owner_phone in res.all()
    ]


async def list_bookings_for_owner(db: AsyncSession, owner_id: int) -> List[Dict[str, Any]]:
    """
    Incoming requests, filtered on the denormalized Booking.owner_id.
    Title falls back to the snapshot when the property is gone.
    """
    renter = aliased(User)
    stmt = (
        select(Booking, renter.name, renter.email, Property.title)
        .outerjoin(renter, Booking.renter_id == renter.id)
        .outerjoin(Property, Booking.property_id == Property.id)
        .where(Booking.owner_id == owner_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return [
        {
            "id": b.id,
            "propertyId": b.property_id,
            "renterName": renter_name,
            "renterEmail": renter_email,
            "propertyTitle": live_title if live_title is not None else b.property_title,
            "message": b.message,
            "status": b.status,
            "createdAt": b.created_at,
        }
        for b, renter_name, renter_email, live_title in res.all()
    ]


async def set_owned_booking_status(
    db: AsyncSession,
    booking_id: int,
    owner_id: int,
    new_status: str,
) -> Booking | None:
    # last write wins; no version check
    res = await db.execute(
        select(Booking).where(Booking.id == booking_id, Booking.owner_id == owner_id)
    )
    booking = res.scalar_one_or_none()
    if booking is None:
        return None
    booking.status = new_status
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    return booking
