"""Expense category endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from finboard.api.deps import get_ledger_service
from finboard.api.schemas import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    CategoryResponse,
    CategoryListResponse,
    CategoryReassignRequest,
    CategoryReassignResponse,
)
from finboard.domain.models import EntryType
from finboard.services import LedgerService, CategoryUpdate, SubCategoryInput

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    request: CategoryCreateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> CategoryResponse:
    """Create a category with optional subcategories."""
    category = ledger.create_category(
        user_id=request.user_id,
        name=request.name,
        entry_type=request.entry_type,
        color=request.color,
        subcategories=request.subcategories,
    )
    return CategoryResponse.model_validate(category)


@router.get("", response_model=CategoryListResponse)
def list_categories(
    user_id: str = Query(..., min_length=1),
    entry_type: Optional[EntryType] = Query(None),
    ledger: LedgerService = Depends(get_ledger_service),
) -> CategoryListResponse:
    """List a user's categories, optionally for one entry type."""
    categories = ledger.list_categories(user_id, entry_type)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        count=len(categories),
    )


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> CategoryResponse:
    return CategoryResponse.model_validate(ledger.get_category(category_id))


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> CategoryResponse:
    """Update a category; renames propagate to existing entries."""
    subcategories = None
    if request.subcategories is not None:
        subcategories = [
            SubCategoryInput(name=s.name, subcategory_id=s.subcategory_id)
            for s in request.subcategories
        ]
    category = ledger.update_category(
        category_id,
        CategoryUpdate(name=request.name, color=request.color, subcategories=subcategories),
    )
    return CategoryResponse.model_validate(category)


@router.post("/{category_id}/reassign", response_model=CategoryReassignResponse)
def reassign_entries(
    category_id: str,
    request: CategoryReassignRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> CategoryReassignResponse:
    """Move the category's entries, or one subcategory's, to another category."""
    moved = ledger.reassign_entries(
        category_id,
        request.target_category_id,
        subcategory_id=request.subcategory_id,
        target_subcategory_id=request.target_subcategory_id,
    )
    return CategoryReassignResponse(moved=moved)


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    reassign_to: Optional[str] = Query(None, description="Move entries to this category first"),
    reassign_subcategory_id: Optional[str] = Query(None),
    ledger: LedgerService = Depends(get_ledger_service),
) -> None:
    """Delete a category, optionally moving its entries elsewhere first."""
    ledger.delete_category(
        category_id,
        reassign_to=reassign_to,
        reassign_subcategory_id=reassign_subcategory_id,
    )
