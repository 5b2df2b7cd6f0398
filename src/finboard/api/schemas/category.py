"""Pydantic schemas for category endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from finboard.domain.models.enums import EntryType


class SubCategoryRequest(BaseModel):
    """Subcategory in an update request; omit the id to add a new one."""

    name: str = Field(..., min_length=1, max_length=255)
    subcategory_id: Optional[str] = None


class CategoryCreateRequest(BaseModel):
    """Request schema for creating a category."""

    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    entry_type: EntryType
    color: Optional[str] = Field(default=None, max_length=16)
    subcategories: list[str] = Field(default_factory=list, description="Subcategory names")


class CategoryUpdateRequest(BaseModel):
    """Request schema for updating a category (partial update)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    color: Optional[str] = Field(default=None, max_length=16)
    subcategories: Optional[list[SubCategoryRequest]] = Field(
        default=None,
        description="Replaces the whole subcategory list when given",
    )


class SubCategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    subcategory_id: str
    name: str


class CategoryResponse(BaseModel):
    """Response schema for a single category."""

    model_config = {"from_attributes": True}

    category_id: str
    user_id: str
    name: str
    entry_type: EntryType
    color: Optional[str] = None
    subcategories: list[SubCategoryResponse]
    created_at: Optional[datetime] = None


class CategoryListResponse(BaseModel):
    """Response schema for listing categories."""

    categories: list[CategoryResponse]
    count: int


class CategoryReassignRequest(BaseModel):
    """Move a category's entries, or one subcategory's, to another category."""

    target_category_id: str = Field(..., min_length=1)
    subcategory_id: Optional[str] = Field(
        default=None,
        description="Only move entries of this source subcategory",
    )
    target_subcategory_id: Optional[str] = None


class CategoryReassignResponse(BaseModel):
    moved: int
