# househunt/services/listings.py
"""
Owner-side property management. Every mutation is a query filtered by
id AND owner_id, so another owner's listing looks exactly like a missing one.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from fastapi import UploadFile
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.core.errors import ValidationError
from househunt.core.permissions import found_or_404
from househunt.core.security import Claims
from househunt.db import crud_properties
from househunt.db.models import Property
from househunt.schemas.property import PropertyCreate, PropertyUpdate
from househunt.utils.images import ImageStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _parse(model: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model(**data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "body"
        raise ValidationError(f"{field}: {first.get('msg')}") from e


def parse_new_property(data: Dict[str, Any]) -> Dict[str, Any]:
    if not data.get("title") or not data.get("location") or data.get("rent") is None:
        raise ValidationError("Title, location & rent are required.")
    # unset optionals fall back to model defaults
    clean = {k: v for k, v in data.items() if v is not None}
    return _parse(PropertyCreate, clean).model_dump()


def parse_property_changes(data: Dict[str, Any]) -> Dict[str, Any]:
    return _parse(PropertyUpdate, data).model_dump(exclude_none=True)


async def add_property(
    db: AsyncSession,
    owner: Claims,
    images: ImageStore,
    data: Dict[str, Any],
    image: Optional[UploadFile] = None,
) -> Property:
    fields = parse_new_property(data)
    fields["image_url"] = await images.save(image)
    prop = await crud_properties.create_property(db, owner_id=owner.user_id, **fields)
    logger.info("property id=%s created by owner id=%s", prop.id, owner.user_id)
    return prop


async def my_properties(db: AsyncSession, owner: Claims) -> List[Property]:
    return await crud_properties.list_properties_for_owner(db, owner.user_id)


async def edit_property(
    db: AsyncSession,
    owner: Claims,
    images: ImageStore,
    prop_id: int,
    data: Dict[str, Any],
    image: Optional[UploadFile] = None,
) -> Property:
    changes = parse_property_changes(data)
    # check ownership before touching the disk
    found_or_404(await crud_properties.get_owned_property(db, prop_id, owner.user_id), "Property")
    if image is not None and image.filename:
        changes["image_url"] = await images.save(image)
    prop = await crud_properties.update_owned_property(db, prop_id, owner.user_id, changes)
    return found_or_404(prop, "Property")


async def remove_property(db: AsyncSession, owner: Claims, prop_id: int) -> None:
    deleted = await crud_properties.delete_owned_property(db, prop_id, owner.user_id)
    logger.info("delete property id=%s by owner id=%s: %s row(s)", prop_id, owner.user_id, deleted)
