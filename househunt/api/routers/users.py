from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.api.dependencies import CurrentClaims
from househunt.db import crud_users
from househunt.db.session import get_db
from househunt.schemas.user import UserOut

router = APIRouter()


@router.get("/me")
async def me(current_user: CurrentClaims, db: AsyncSession = Depends(get_db)):
    """
    What the token says next to what the store says. The two can differ
    (e.g. an owner approved after this token was issued).
    """
    user = await crud_users.get_user(db, current_user.user_id)
    return {
        "claims": current_user.as_payload(),
        "user": UserOut.model_validate(user) if user else None,
    }
