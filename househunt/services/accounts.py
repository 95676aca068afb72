# househunt/services/accounts.py
"""
Registration and login: where the credential store, the token service and
the owner-approval gate meet.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.core.errors import (
    Conflict,
    InvalidCredentials,
    PendingApproval,
    ValidationError,
    WeakPassword,
)
from househunt.core.permissions import ROLE_ADMIN, ROLE_OWNER, ROLE_RENTER, ROLES, STATUS_APPROVED
from househunt.core.security import Claims, TokenService, verify_password
from househunt.db import crud_users
from househunt.db.models import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_DIGIT = re.compile(r"\d")


@dataclass
class IssuedSession:
    token: str
    claims: Claims


@dataclass
class Registration:
    user: User
    session: Optional[IssuedSession]


def check_password_policy(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH or not _DIGIT.search(password):
        raise WeakPassword()


def _issue(tokens: TokenService, user: User) -> IssuedSession:
    token = tokens.issue(user)
    return IssuedSession(token=token, claims=tokens.verify(token))


async def register(
    db: AsyncSession,
    tokens: TokenService,
    *,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    role: Optional[str] = None,
    phone: Optional[str] = None,
) -> Registration:
    if not name or not name.strip() or not email or not password:
        raise ValidationError("Name, email & password are required.")

    role = role or ROLE_RENTER
    if role not in ROLES:
        raise ValidationError("Invalid role.")

    phone = (phone or "").strip()
    if role == ROLE_OWNER and not phone:
        raise ValidationError("Phone number is required for owners.")

    check_password_policy(password)

    email = crud_users.normalize_email(email)
    if await crud_users.get_user_by_email(db, email):
        raise Conflict("Email already registered.")
    if phone and await crud_users.get_user_by_phone(db, phone):
        raise Conflict("Phone already registered.")

    try:
        user = await crud_users.create_user(
            db,
            name=name.strip(),
            email=email,
            password=password,
            role=role,
            phone=phone or None,
        )
    except IntegrityError as e:
        # lost a race against a concurrent registration
        await db.rollback()
        logger.warning("unique violation on register: %s", e.orig)
        raise Conflict("Email or phone already registered.") from e

    logger.info("registered user id=%s role=%s status=%s", user.id, user.role, user.status)

    # owners wait for approval; everyone else gets a token right away
    session = _issue(tokens, user) if user.status == STATUS_APPROVED else None
    return Registration(user=user, session=session)


async def login(
    db: AsyncSession,
    tokens: TokenService,
    *,
    email: Optional[str],
    password: Optional[str],
) -> IssuedSession:
    if not email or not password:
        raise ValidationError("Email & password required.")

    user = await crud_users.get_user_by_email(db, email)
    if user is None:
        raise InvalidCredentials()

    if not user.status:
        logger.warning("user id=%s has no status, backfilling", user.id)
        user = await crud_users.backfill_status(db, user)

    if user.status != STATUS_APPROVED and user.role != ROLE_ADMIN:
        raise PendingApproval()

    if not verify_password(password, user.hashed_password):
        raise InvalidCredentials()

    return _issue(tokens, user)
