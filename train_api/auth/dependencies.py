from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from typing import Optional

from train_api.auth.schemas import CurrentUser
from train_api.auth.service import UserService
from train_api.auth.utils import decode_access_token, token_scopes
from train_api.database import get_db
from train_api.exceptions import AuthenticationRequiredError, AuthorizationDeniedError

WRITE_SCOPE = "bookings:write"

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """Resolve the bearer token into the calling user"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationRequiredError()

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise AuthenticationRequiredError("Could not validate credentials")

    user = UserService.get_user_by_id(db, user_id=payload["sub"])
    if user is None:
        raise AuthenticationRequiredError("Could not validate credentials")

    return CurrentUser(id=user.id, email=user.email, scopes=token_scopes(payload))


def require_write_scope(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Require the token to carry the booking write scope"""
    if not current_user.has_scope(WRITE_SCOPE):
        raise AuthorizationDeniedError("Write scope required")
    return current_user
