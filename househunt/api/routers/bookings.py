from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.api.dependencies import CurrentClaims
from househunt.db.session import get_db
from househunt.schemas.booking import BookingOut, BookingRequest, RenterBookingView
from househunt.services import bookings as booking_service

router = APIRouter()


@router.post("/request", status_code=status.HTTP_201_CREATED)
async def request_booking(
    body: BookingRequest,
    current_user: CurrentClaims,
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.request_booking(
        db, current_user, body.property_id, body.message
    )
    return {"message": "Request sent", "booking": BookingOut.model_validate(booking)}


@router.get("/mine")
async def my_bookings(
    current_user: CurrentClaims,
    db: AsyncSession = Depends(get_db),
):
    """
    Renter dashboard. Bookings whose property/owner was deleted are still
    listed, with null property/owner fields.
    """
    rows = await booking_service.my_bookings(db, current_user)
    return [RenterBookingView.model_validate(r) for r in rows]
