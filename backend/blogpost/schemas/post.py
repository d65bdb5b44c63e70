from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, field_validator

TITLE_MAX = 255

T = TypeVar("T")


def _clean_title(v: str) -> str:
    v = str(v).strip()
    if not v:
        raise ValueError("The title field is required.")
    if len(v) > TITLE_MAX:
        raise ValueError(f"The title field must not be greater than {TITLE_MAX} characters.")
    return v


def _clean_body(v: str) -> str:
    v = str(v)
    if not v.strip():
        raise ValueError("The body field is required.")
    return v


class PostCreate(BaseModel):
    title: str
    body: str

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str):
        return _clean_title(v)

    @field_validator("body")
    @classmethod
    def body_required(cls, v: str):
        return _clean_body(v)


class PostPatch(BaseModel):
    """Partial update. An absent (or null) field keeps the stored value; an empty one is rejected."""

    title: str | None = None
    body: str | None = None

    @field_validator("title")
    @classmethod
    def title_if_present(cls, v: str | None):
        if v is None:
            return None
        return _clean_title(v)

    @field_validator("body")
    @classmethod
    def body_if_present(cls, v: str | None):
        if v is None:
            return None
        return _clean_body(v)


class OwnerOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class PostOut(BaseModel):
    id: int
    user_id: int | None
    title: str
    body: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class PostWithOwnerOut(PostOut):
    owner: OwnerOut | None = None
    owner_name: str


class Page(BaseModel, Generic[T]):
    data: list[T]
    current_page: int
    per_page: int
    total: int
    last_page: int
