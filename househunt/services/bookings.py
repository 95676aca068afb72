# househunt/services/bookings.py
"""
Booking lifecycle: pending -> accepted | rejected.

Duplicate pending requests for the same renter/property are allowed.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from househunt.core.errors import NotFound, ValidationError
from househunt.core.permissions import found_or_404
from househunt.core.security import Claims
from househunt.db import crud_bookings, crud_properties
from househunt.db.models import BOOKING_STATUSES, Booking

logger = logging.getLogger(__name__)


async def request_booking(
    db: AsyncSession,
    renter: Claims,
    property_id: Optional[int],
    message: Optional[str] = None,
) -> Booking:
    if property_id is None:
        raise NotFound("Property not found")
    prop = found_or_404(await crud_properties.get_property(db, property_id), "Property")
    booking = await crud_bookings.create_booking(
        db,
        renter_id=renter.user_id,
        prop=prop,
        message=message,
    )
    logger.info(
        "booking id=%s requested by user id=%s for property id=%s",
        booking.id, renter.user_id, prop.id,
    )
    return booking


async def my_bookings(db: AsyncSession, renter: Claims) -> List[Dict[str, Any]]:
    return await crud_bookings.list_bookings_for_renter(db, renter.user_id)


async def incoming_bookings(db: AsyncSession, owner: Claims) -> List[Dict[str, Any]]:
    return await crud_bookings.list_bookings_for_owner(db, owner.user_id)


async def set_status(
    db: AsyncSession,
    owner: Claims,
    booking_id: int,
    new_status: Optional[str],
) -> Booking:
    if new_status not in BOOKING_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(BOOKING_STATUSES)}")
    booking = found_or_404(
        await crud_bookings.set_owned_booking_status(db, booking_id, owner.user_id, new_status),
        "Booking",
    )
    logger.info("booking id=%s set to %s by owner id=%s", booking.id, new_status, owner.user_id)
    return booking
