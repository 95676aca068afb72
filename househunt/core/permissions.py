# househunt/core/permissions.py
"""
Capability checkpoints, evaluated in order:
token -> role -> status -> ownership.

Pure decisions over token claims; FastAPI wiring lives in
househunt.api.dependencies.
"""

import logging
from typing import Optional, TypeVar

from househunt.core.errors import Forbidden, NotFound, Unauthenticated
from househunt.core.security import Claims, InvalidToken, TokenService

logger = logging.getLogger(__name__)

ROLE_RENTER = "renter"
ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"
ROLES = (ROLE_RENTER, ROLE_OWNER, ROLE_ADMIN)

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"

T = TypeVar("T")


def require_authenticated(token: Optional[str], tokens: TokenService) -> Claims:
    if not token:
        raise Unauthenticated("No token provided")
    try:
        return tokens.verify(token)
    except InvalidToken as e:
        logger.info("rejected token: %s", e)
        raise Unauthenticated("Invalid token") from e


def require_role(claims: Claims, role: str) -> Claims:
    if claims.role != role:
        raise Forbidden("Insufficient permissions")
    return claims


def require_approved_owner(claims: Claims) -> Claims:
    # status comes from the token, not the store: re-login after approval
    if claims.role == ROLE_OWNER and claims.status == STATUS_APPROVED:
        return claims
    raise Forbidden("Owner access only")


def require_admin(claims: Claims) -> Claims:
    if claims.role != ROLE_ADMIN:
        raise Forbidden("Admin access only")
    return claims


def found_or_404(resource: Optional[T], what: str = "Resource") -> T:
    """
    Result of a query filtered by id AND owner. Missing and not-yours are
    the same answer.
    """
    if resource is None:
        raise NotFound(f"{what} not found")
    return resource
