# househunt/db/crud_users.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.core.permissions import ROLE_OWNER, STATUS_APPROVED, STATUS_PENDING
from househunt.core.security import get_password_hash
from househunt.db.models import User, initial_status_for_role


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == normalize_email(email)))
    return res.scalar_one_or_none()


async def get_user_by_phone(db: AsyncSession, phone: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.phone == phone))
    return res.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
    phone: Optional[str] = None,
) -> User:
    """
    Insert a user with a hashed password and the role's initial status.
    Uniqueness is the caller's job; an IntegrityError still propagates.
    """
    user = User(
        name=name,
        email=normalize_email(email),
        phone=phone or None,
        hashed_password=get_password_hash(password),
        role=role,
        status=initial_status_for_role(role),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def backfill_status(db: AsyncSession, user: User) -> User:
    """Legacy rows without a status get the role default."""
    user.status = initial_status_for_role(user.role)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def list_pending_owners(db: AsyncSession) -> List[User]:
    res = await db.execute(
        select(User)
        .where(User.role == ROLE_OWNER, User.status == STATUS_PENDING)
        .order_by(User.id.desc())
    )
    return list(res.scalars().all())


async def approve_owner(db: AsyncSession, user_id: int) -> Optional[User]:
    """
    Filtered on role=owner, so a renter/admin id behaves like a missing one.
    Approving an already approved owner is a no-op that still returns it.
    """
    res = await db.execute(
        select(User).where(User.id == user_id, User.role == ROLE_OWNER)
    )
    owner = res.scalar_one_or_none()
    if owner is None:
        return None
    owner.status = STATUS_APPROVED
    db.add(owner)
    await db.commit()
    await db.refresh(owner)
    return owner
