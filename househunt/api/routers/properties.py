# househunt/api/routers/properties.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.api.dependencies import Images, OwnerClaims
from househunt.db import crud_properties
from househunt.db.session import get_db
from househunt.schemas.property import PropertyOut, PropertyWithOwner
from househunt.services import listings

router = APIRouter()
public_router = APIRouter()


@router.get("")
async def list_properties_with_owner(db: AsyncSession = Depends(get_db)):
    """
    Public listing, each property with its owner's name/email
    (owner is null if that user no longer exists).
    """
    items = await crud_properties.list_properties_with_owner(db)
    return [PropertyWithOwner.model_validate(p) for p in items]


@router.post("/add", status_code=status.HTTP_201_CREATED)
async def add_property(
    current_user: OwnerClaims,
    images: Images,
    db: AsyncSession = Depends(get_db),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    rent: Optional[float] = Form(None),
    bedrooms: Optional[int] = Form(None),
    image: Optional[UploadFile] = File(None),
):
    """
    Older add endpoint. Needs an owner token; approval status is not
    checked here, unlike /owner/properties.
    """
    prop = await listings.add_property(
        db,
        current_user,
        images,
        {
            "title": title,
            "description": description,
            "location": location,
            "rent": rent,
            "bedrooms": bedrooms,
        },
        image,
    )
    return {"message": "Property added successfully", "property": PropertyOut.model_validate(prop)}


@public_router.get("/properties")
async def public_properties(db: AsyncSession = Depends(get_db)):
    # anyone, no auth, full list
    items = await crud_properties.list_properties(db)
    return [PropertyOut.model_validate(p) for p in items]
