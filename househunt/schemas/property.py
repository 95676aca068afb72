# househunt/schemas/property.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from househunt.schemas.user import UserContact

PropertyType = Literal["apartment", "house", "villa"]


class PropertyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    owner_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    rent: float
    location: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    size: Optional[float] = None
    furnished: bool = False
    type: str
    image_url: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PropertyWithOwner(PropertyOut):
    owner: Optional[UserContact] = None


class PropertyCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    rent: float = Field(gt=0)
    location: str = Field(min_length=1)
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[int] = Field(default=None, ge=0)
    size: Optional[float] = Field(default=None, ge=0)
    furnished: bool = False
    type: PropertyType = "apartment"


class PropertyUpdate(BaseModel):
    """Partial update. No owner_id / image_url here on purpose."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    rent: Optional[float] = Field(default=None, gt=0)
    location: Optional[str] = Field(default=None, min_length=1)
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[int] = Field(default=None, ge=0)
    size: Optional[float] = Field(default=None, ge=0)
    furnished: Optional[bool] = None
    type: Optional[PropertyType] = None
