from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from train_api.auth.dependencies import get_current_user
from train_api.auth.schemas import AuthResponse, CurrentUser, LoginRequest, User, UserCreate
from train_api.auth.service import UserService
from train_api.auth.utils import create_access_token
from train_api.config import settings
from train_api.database import get_db
from train_api.exceptions import AuthenticationRequiredError, NotFoundError

router = APIRouter()


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    return UserService.create_user(db=db, user=user)


@router.post("/login", response_model=AuthResponse)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token"""
    user = UserService.authenticate_user(db, login_data.email, login_data.password)
    if not user:
        raise AuthenticationRequiredError("Incorrect email or password")

    scope = settings.DEFAULT_TOKEN_SCOPES
    access_token = create_access_token(data={"sub": user.id, "scope": scope})
    return AuthResponse(
        access_token=access_token,
        token_type="bearer",
        scope=scope,
        user=User.model_validate(user),
    )


@router.get("/me", response_model=User)
def read_users_me(current_user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get current user profile"""
    user = UserService.get_user_by_id(db, current_user.id)
    if not user:
        raise NotFoundError("User not found")
    return user
