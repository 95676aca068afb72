from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.api.dependencies import AdminClaims
from househunt.db.session import get_db
from househunt.schemas.user import UserOut
from househunt.services import approval

router = APIRouter()


@router.get("/owners/pending")
async def pending_owners(
    current_user: AdminClaims,
    db: AsyncSession = Depends(get_db),
):
    owners = await approval.pending_owners(db)
    return [UserOut.model_validate(u) for u in owners]


@router.put("/owners/{owner_id}/approve")
async def approve_owner(
    owner_id: int,
    current_user: AdminClaims,
    db: AsyncSession = Depends(get_db),
):
    """
    Flip a pending owner to approved. Ids that are not owners are 404.
    Their existing tokens still say pending until they log in again.
    """
    owner = await approval.approve_owner(db, owner_id, approved_by=current_user.user_id)
    return {"message": "Owner approved", "owner": UserOut.model_validate(owner)}
