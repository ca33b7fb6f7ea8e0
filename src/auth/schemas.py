from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateUser(CamelModel):
    username: str = Field(min_length=1)
    email: EmailStr
    full_name: str = Field(alias="fullName", min_length=1)
    password: str = Field(min_length=1)
    avatar: str = Field(min_length=1)
    cover_image: Optional[str] = Field(default=None, alias="coverImage")


class LoginUser(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str


class RefreshToken(CamelModel):
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")


class ChangePassword(CamelModel):
    old_password: str = Field(alias="oldPassword")
    new_password: str = Field(alias="newPassword", min_length=1)


class UpdateAccount(CamelModel):
    full_name: str = Field(alias="fullName", min_length=1)
    email: EmailStr


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
