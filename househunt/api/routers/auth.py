# househunt/api/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.api.dependencies import Tokens
from househunt.db.session import get_db
from househunt.schemas.auth import LoginResponse, RegisterResponse
from househunt.schemas.user import LoginRequest, RegisterRequest, UserOut
from househunt.services import accounts

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    tokens: Tokens,
    db: AsyncSession = Depends(get_db),
):
    """
    Renters (and admins) get a token immediately. Owners get token=null
    and must log in after an admin approves them.
    """
    result = await accounts.register(
        db,
        tokens,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        phone=payload.phone,
    )
    session = result.session
    return RegisterResponse(
        user=UserOut.model_validate(result.user),
        token=session.token if session else None,
        token_payload=session.claims.as_payload() if session else None,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    tokens: Tokens,
    db: AsyncSession = Depends(get_db),
):
    session = await accounts.login(db, tokens, email=payload.email, password=payload.password)
    return LoginResponse(token=session.token, token_payload=session.claims.as_payload())
