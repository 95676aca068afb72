from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.api.dependencies import ApprovedOwner, Images
from househunt.core.errors import ValidationError
from househunt.db.session import get_db
from househunt.schemas.booking import BookingOut, BookingStatusUpdate, OwnerBookingView
from househunt.schemas.property import PropertyOut
from househunt.services import bookings as booking_service
from househunt.services import listings

router = APIRouter()


async def _json_changes(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError as e:
        raise ValidationError("Malformed JSON body.") from e
    if not isinstance(body, dict):
        raise ValidationError("Expected a JSON object.")
    return body


@router.get("/properties")
async def owner_properties(
    current_user: ApprovedOwner,
    db: AsyncSession = Depends(get_db),
):
    """
    All properties of the currently authenticated (approved) owner.
    """
    items = await listings.my_properties(db, current_user)
    return [PropertyOut.model_validate(p) for p in items]


@router.post("/properties", status_code=status.HTTP_201_CREATED)
async def create_property(
    current_user: ApprovedOwner,
    images: Images,
    db: AsyncSession = Depends(get_db),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    rent: Optional[float] = Form(None),
    location: Optional[str] = Form(None),
    bedrooms: Optional[int] = Form(None),
    bathrooms: Optional[int] = Form(None),
    size: Optional[float] = Form(None),
    furnished: Optional[bool] = Form(None),
    type: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
):
    """
    ownerId always comes from the token. The image is optional; if it
    cannot be processed the original file is stored.
    """
    prop = await listings.add_property(
        db,
        current_user,
        images,
        {
            "title": title,
            "description": description,
            "rent": rent,
            "location": location,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "size": size,
            "furnished": furnished,
            "type": type,
        },
        image,
    )
    return PropertyOut.model_validate(prop)


@router.patch("/properties/{prop_id}")
async def update_property(
    prop_id: int,
    request: Request,
    current_user: ApprovedOwner,
    images: Images,
    db: AsyncSession = Depends(get_db),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    rent: Optional[float] = Form(None),
    location: Optional[str] = Form(None),
    bedrooms: Optional[int] = Form(None),
    bathrooms: Optional[int] = Form(None),
    size: Optional[float] = Form(None),
    furnished: Optional[bool] = Form(None),
    type: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
):
    """
    Partial update from a JSON or multipart body. Not-yours and not-there
    are both 404; ownerId in the payload is ignored.
    """
    if request.headers.get("content-type", "").startswith("application/json"):
        data = await _json_changes(request)
        image = None
    else:
        data = {
            "title": title,
            "description": description,
            "rent": rent,
            "location": location,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "size": size,
            "furnished": furnished,
            "type": type,
        }
    prop = await listings.edit_property(db, current_user, images, prop_id, data, image)
    return PropertyOut.model_validate(prop)


@router.delete("/properties/{prop_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(
    prop_id: int,
    current_user: ApprovedOwner,
    db: AsyncSession = Depends(get_db),
):
    # 204 whether or not anything matched (id AND owner)
    await listings.remove_property(db, current_user, prop_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/bookings")
async def owner_bookings(
    current_user: ApprovedOwner,
    db: AsyncSession = Depends(get_db),
):
    """
    Incoming booking requests for this owner's properties, newest first.
    """
    rows = await booking_service.incoming_bookings(db, current_user)
    return [OwnerBookingView.model_validate(r) for r in rows]


@router.patch("/bookings/{booking_id}/status")
async def update_booking_status(
    booking_id: int,
    body: BookingStatusUpdate,
    current_user: ApprovedOwner,
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.set_status(db, current_user, booking_id, body.status)
    return BookingOut.model_validate(booking)
