from pydantic import BaseModel, EmailStr, ValidationInfo, field_validator
from datetime import datetime

from blogpost.models.user import Role

NAME_MAX = 255
PASSWORD_MIN = 8


def _clean_name(v: str) -> str:
    v = str(v).strip()
    if not v:
        raise ValueError("The name field is required.")
    if len(v) > NAME_MAX:
        raise ValueError(f"The name field must not be greater than {NAME_MAX} characters.")
    return v


def _check_new_password(v: str) -> str:
    v = str(v)
    if len(v) < PASSWORD_MIN:
        raise ValueError(f"The password field must be at least {PASSWORD_MIN} characters.")
    return v


def _check_confirmation(v: str, info: ValidationInfo) -> str:
    # password already failed its own rule when it is missing from info.data
    if "password" in info.data and v != info.data["password"]:
        raise ValueError("The password field confirmation does not match.")
    return v


class ProfileUpdate(BaseModel):
    name: str
    email: EmailStr

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str):
        return _clean_name(v)

    @field_validator("email", mode="before")
    @classmethod
    def email_trim(cls, v):
        return str(v).strip() if v is not None else v


class PasswordUpdate(BaseModel):
    current_password: str
    password: str
    password_confirmation: str

    @field_validator("current_password")
    @classmethod
    def current_required(cls, v: str):
        if not v:
            raise ValueError("The current password field is required.")
        return v

    @field_validator("password")
    @classmethod
    def password_min(cls, v: str):
        return _check_new_password(v)

    @field_validator("password_confirmation")
    @classmethod
    def password_confirmed(cls, v: str, info: ValidationInfo):
        return _check_confirmation(v, info)


class RegisterIn(ProfileUpdate):
    password: str
    password_confirmation: str

    @field_validator("password")
    @classmethod
    def password_min(cls, v: str):
        return _check_new_password(v)

    @field_validator("password_confirmation")
    @classmethod
    def password_confirmed(cls, v: str, info: ValidationInfo):
        return _check_confirmation(v, info)


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    created_at: datetime | None = None

    class Config:
        from_attributes = True
