# househunt/api/dependencies.py
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from househunt.core import permissions
from househunt.core.security import Claims, TokenService
from househunt.utils.images import ImageStore

# auto_error=False: a missing/malformed header becomes our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store


async def get_current_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Claims:
    """
    Verifies `Authorization: Bearer <token>` and returns its claims.
    Does not hit the DB: claims are whatever was true at issuance.
    """
    token = credentials.credentials if credentials else None
    return permissions.require_authenticated(token, tokens)


def require_role(role: str):
    """
    Dependency factory:
      claims = Depends(require_role("owner"))
    """

    async def _inner(claims: Claims = Depends(get_current_claims)) -> Claims:
        return permissions.require_role(claims, role)

    return _inner


async def require_approved_owner(claims: Claims = Depends(get_current_claims)) -> Claims:
    return permissions.require_approved_owner(claims)


async def require_admin(claims: Claims = Depends(get_current_claims)) -> Claims:
    return permissions.require_admin(claims)


CurrentClaims = Annotated[Claims, Depends(get_current_claims)]
OwnerClaims = Annotated[Claims, Depends(require_role(permissions.ROLE_OWNER))]
ApprovedOwner = Annotated[Claims, Depends(require_approved_owner)]
AdminClaims = Annotated[Claims, Depends(require_admin)]
Images = Annotated[ImageStore, Depends(get_image_store)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
