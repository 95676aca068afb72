# househunt/services/approval.py
"""
Owner approval: pending -> approved, one way, admin-triggered.

Tokens issued before approval keep status=pending; the owner has to log
in again to get a token the owner endpoints accept.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from househunt.core.permissions import found_or_404
from househunt.db import crud_users
from househunt.db.models import User

logger = logging.getLogger(__name__)


async def pending_owners(db: AsyncSession) -> List[User]:
    return await crud_users.list_pending_owners(db)


async def approve_owner(db: AsyncSession, owner_id: int, *, approved_by: int) -> User:
    owner = found_or_404(await crud_users.approve_owner(db, owner_id), "Owner")
    logger.info("owner id=%s approved by admin id=%s", owner.id, approved_by)
    return owner
