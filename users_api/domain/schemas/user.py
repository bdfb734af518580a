"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class SignupRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class VerifyEmailRequest(BaseModel):
    email: Optional[str] = None


class SubscriptionUpdate(BaseModel):
    subscription: Optional[str] = None


class UserPublic(BaseModel):
    email: str
    subscription: str

    model_config = {"from_attributes": True}


class UserRead(BaseModel):
    id: int
    email: str
    subscription: str
    avatar_url: Optional[str] = None
    verify: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SignupResponse(BaseModel):
    user: UserPublic


class LoginResponse(BaseModel):
    token: str
    user: UserPublic


class SubscriptionResponse(BaseModel):
    message: str
    user: UserRead


class MessageResponse(BaseModel):
    message: str
