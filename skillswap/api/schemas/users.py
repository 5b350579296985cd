"""Pydantic schemas for user account endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field
from skillswap.core.auth import Role

from .common import WireModel


class RegisterRequest(BaseModel):
    fullname: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128, description="Password (min 8 characters)")
    role: Role = Field(default=Role.LEARNER)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(WireModel):
    id: str = Field(..., alias="_id")
    fullname: str
    email: str
    role: str
    created_at: datetime | None = Field(default=None, alias="createdAt")


class AuthResponse(WireModel):
    success: bool = True
    message: str
    user: UserResponse
    token: str


class MeResponse(WireModel):
    success: bool = True
    user: UserResponse
