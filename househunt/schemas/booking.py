# househunt/schemas/booking.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookingRequest(BaseModel):
    # any "status" sent by the client is dropped here
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    property_id: Optional[int] = Field(default=None, alias="propertyId")
    message: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: Optional[str] = None


class BookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    property_id: Optional[int] = None
    owner_id: Optional[int] = None
    renter_id: Optional[int] = None
    property_title: Optional[str] = None
    message: Optional[str] = None
    status: str
    created_at: datetime


class RenterBookingView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    property_id: Optional[int] = None
    property_title: Optional[str] = None
    property_location: Optional[str] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    owner_phone: Optional[str] = None
    message: Optional[str] = None
    status: str
    created_at: datetime


class OwnerBookingView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    property_id: Optional[int] = None
    renter_name: Optional[str] = None
    renter_email: Optional[str] = None
    property_title: Optional[str] = None
    message: Optional[str] = None
    status: str
    created_at: datetime
