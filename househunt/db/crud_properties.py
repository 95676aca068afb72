# househunt/db/crud_properties.py
from typing import Any, Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from househunt.db.models import Property

# never writable through update_owned_property
PROTECTED_FIELDS = {"id", "owner_id", "created_at", "updated_at"}


async def list_properties(db: AsyncSession) -> List[Property]:
    """Public listing: everything, newest first."""
    res = await db.execute(select(Property).order_by(Property.id.desc()))
    return list(res.scalars().all())


async def list_properties_with_owner(db: AsyncSession) -> List[Property]:
    stmt = (
        select(Property)
        .options(selectinload(Property.owner))
        .order_by(Property.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_property(db: AsyncSession, prop_id: int) -> Property | None:
    res = await db.execute(select(Property).where(Property.id == prop_id))
    return res.scalars().first()


async def list_properties_for_owner(db: AsyncSession, owner_id: int) -> List[Property]:
    res = await db.execute(
        select(Property)
        .where(Property.owner_id == owner_id)
        .order_by(Property.id.desc())
    )
    return list(res.scalars().all())


async def create_property(db: AsyncSession, *, owner_id: int, **fields: Any) -> Property:
    for key in PROTECTED_FIELDS:
        fields.pop(key, None)
    prop = Property(owner_id=owner_id, **fields)
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def get_owned_property(db: AsyncSession, prop_id: int, owner_id: int) -> Property | None:
    """One query for 'exists AND belongs to owner_id'."""
    res = await db.execute(
        select(Property).where(Property.id == prop_id, Property.owner_id == owner_id)
    )
    return res.scalars().first()


async def update_owned_property(
    db: AsyncSession,
    prop_id: int,
    owner_id: int,
    data: Dict[str, Any],
) -> Property | None:
    prop = await get_owned_property(db, prop_id, owner_id)
    if prop is None:
        return None
    for k, v in data.items():
        if v is not None and k not in PROTECTED_FIELDS:
            setattr(prop, k, v)
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def delete_owned_property(db: AsyncSession, prop_id: int, owner_id: int) -> int:
    res = await db.execute(
        delete(Property).where(Property.id == prop_id, Property.owner_id == owner_id)
    )
    await db.commit()
    return res.rowcount or 0
