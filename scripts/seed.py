# scripts/seed.py
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from househunt.core.config import get_settings
from househunt.db import crud_properties, crud_users
from househunt.db.base import Base
from househunt.db.session import build_engine, build_session_factory

logger = logging.getLogger("househunt.seed")

ADMIN = {"name": "Admin", "email": "admin@example.com", "password": "admin123", "role": "admin"}
OWNER = {
    "name": "Demo Owner",
    "email": "owner@example.com",
    "password": "owner123",
    "role": "owner",
    "phone": "9000000001",
}
DEMO_PROPERTIES = [
    {
        "title": "Cozy Apartment in Banjara Hills",
        "description": "A peaceful 2BHK with great view.",
        "location": "Hyderabad",
        "rent": 20000,
        "bedrooms": 2,
        "type": "apartment",
    },
    {
        "title": "Luxury Villa in Jubilee Hills",
        "description": "Spacious 5BHK with a pool and garden.",
        "location": "Hyderabad",
        "rent": 120000,
        "bedrooms": 5,
        "type": "villa",
        "furnished": True,
    },
    {
        "title": "1BHK Near Hitech City",
        "description": "Perfect for working professionals.",
        "location": "Hyderabad",
        "rent": 15000,
        "bedrooms": 1,
        "type": "apartment",
    },
]


async def seed(db: AsyncSession) -> dict:
    """
    Idempotent: existing admin/owner are reused, properties are only added
    when the demo owner has none.
    """
    admin = await crud_users.get_user_by_email(db, ADMIN["email"])
    if not admin:
        admin = await crud_users.create_user(db, **ADMIN)

    owner = await crud_users.get_user_by_email(db, OWNER["email"])
    if not owner:
        owner = await crud_users.create_user(db, **OWNER)
    if owner.status != "approved":
        owner = await crud_users.approve_owner(db, owner.id)

    created = 0
    if not await crud_properties.list_properties_for_owner(db, owner.id):
        for data in DEMO_PROPERTIES:
            await crud_properties.create_property(db, owner_id=owner.id, **data)
            created += 1

    return {"admin_id": admin.id, "owner_id": owner.id, "properties_created": created}


async def main():
    settings = get_settings()
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = build_session_factory(engine)
    async with session_factory() as db:
        summary = await seed(db)
    await engine.dispose()
    logger.info("seed complete: %s", summary)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
