"""
Request dependencies for identity.

The identity provider issues a signed bearer token; its `sub` claim is the
stable user id.
"""
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from mindfulchat.core.security import decode_access_token
from mindfulchat.db.session import get_db
from mindfulchat.models.user import User
from mindfulchat.services import storage

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"}
    )


def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> dict:
    """Verified claims of the bearer token."""
    if credentials is None:
        raise _unauthorized()
    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise _unauthorized()
    return payload


def get_current_user_id(claims: dict = Depends(get_token_claims)) -> str:
    """Stable identifier of the authenticated user."""
    return str(claims["sub"])


def get_current_user(
    claims: dict = Depends(get_token_claims),
    db: Session = Depends(get_db)
) -> User:
    """Authenticated user, created from the token claims on first sight."""
    return storage.upsert_user(
        db,
        user_id=str(claims["sub"]),
        email=claims.get("email"),
        first_name=claims.get("first_name"),
        last_name=claims.get("last_name"),
        profile_image_url=claims.get("profile_image_url")
    )
