"""
Food API — Auth schemas
"""
from pydantic import BaseModel, EmailStr, Field


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class UserInfo(BaseModel):
    uid: str
    email: str | None = None


class SessionResponse(BaseModel):
    message: str
    token: str
    user: UserInfo


class CurrentUserResponse(BaseModel):
    user: UserInfo
