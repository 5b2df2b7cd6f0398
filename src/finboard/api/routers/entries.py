"""Ledger entry endpoints."""

from fastapi import APIRouter, Depends, Query

from finboard.api.deps import get_entry_filter, get_ledger_service, get_time_window
from finboard.api.schemas import (
    EntryCreateRequest,
    EntryUpdateRequest,
    EntryResponse,
    EntryListResponse,
    EntryDeleteResponse,
)
from finboard.domain.models import DeleteScope
from finboard.services import LedgerService, EntryCreate, EntryUpdate
from finboard.services.expense_aggregator import EntryFilter, TimeWindow

router = APIRouter(prefix="/entries", tags=["entries"])


@router.post("", response_model=EntryListResponse, status_code=201)
def create_entry(
    request: EntryCreateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> EntryListResponse:
    """Create an entry; recurring and installment input creates the whole series."""
    entries = ledger.create_entry(EntryCreate(**request.model_dump()))
    return EntryListResponse(
        entries=[EntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )


@router.get("", response_model=EntryListResponse)
def list_entries(
    user_id: str = Query(..., min_length=1),
    window: TimeWindow = Depends(get_time_window),
    entry_filter: EntryFilter = Depends(get_entry_filter),
    ledger: LedgerService = Depends(get_ledger_service),
) -> EntryListResponse:
    """List entries for a period, narrowed by the type/category/subcategory filter."""
    entries = ledger.list_entries(user_id, window, entry_filter)
    return EntryListResponse(
        entries=[EntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )


@router.get("/{entry_id}", response_model=EntryResponse)
def get_entry(
    entry_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> EntryResponse:
    return EntryResponse.model_validate(ledger.get_entry(entry_id))


@router.put("/{entry_id}", response_model=EntryResponse)
def update_entry(
    entry_id: str,
    request: EntryUpdateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> EntryResponse:
    """Edit a single entry."""
    entry = ledger.update_entry(entry_id, EntryUpdate(**request.model_dump()))
    return EntryResponse.model_validate(entry)


@router.delete("/{entry_id}", response_model=EntryDeleteResponse)
def delete_entry(
    entry_id: str,
    scope: DeleteScope = Query(DeleteScope.SINGLE),
    ledger: LedgerService = Depends(get_ledger_service),
) -> EntryDeleteResponse:
    """Delete an entry, its recurring series or its installment plan."""
    deleted = ledger.delete_entry(entry_id, scope)
    return EntryDeleteResponse(scope=scope, deleted=deleted)
