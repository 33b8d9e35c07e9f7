"""
Admin Auth Schemas

Request/response models for admin login and role management.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from aptiprep.models.enums import UserRole


class AdminLoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    redirect_to: Optional[str] = Field(
        default=None,
        description="Page the user was sent away from; defaults to the admin dashboard",
    )


class AdminLoginResponse(BaseModel):
    uid: str
    email: str
    redirect_to: str
    id_token: str
    refresh_token: str = ""


class AdminRoleResponse(BaseModel):
    uid: str
    role: UserRole
    message: str


class RoleAssignmentRequest(BaseModel):
    uid: str = Field(..., min_length=1)
    role: UserRole
