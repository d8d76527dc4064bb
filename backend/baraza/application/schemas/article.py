"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class TagSchema(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class CategorySchema(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["History"])


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, max_length=255, examples=["The Swahili Coast"])
    content: str = Field(..., min_length=1, examples=["Trade winds shaped the coast..."])
    summary: str = Field("", max_length=2000)
    cover_image_url: str | None = Field(None, max_length=1024)
    tag_list: str = Field("", examples=["history,science"])
    category_ids: list[int] = Field(default_factory=list)


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional.

    ``tag_list`` replaces the whole tag set when given; ``None`` leaves it as is.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    summary: str | None = Field(None, max_length=2000)
    cover_image_url: str | None = Field(None, max_length=1024)
    tag_list: str | None = None
    category_ids: list[int] | None = None


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    title: str
    content: str
    summary: str
    summary_excerpt: str
    cover_image_url: str
    user_id: int | None
    tag_list: str
    tags: list[TagSchema]
    categories: list[CategorySchema]
    created_at: datetime
    updated_at: datetime
