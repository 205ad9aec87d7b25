from pydantic import BaseModel, EmailStr, Field
from typing import List
from datetime import datetime


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)


class User(UserBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    access_token: str
    token_type: str
    scope: str
    user: User


class CurrentUser(BaseModel):
    """Authenticated caller identity passed explicitly into services"""
    id: str
    email: str
    scopes: List[str] = []

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes
