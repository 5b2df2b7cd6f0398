"""Monthly snapshot endpoints."""

from fastapi import APIRouter, Depends, Query

from finboard.api.deps import get_asset_service, get_snapshot_service
from finboard.api.schemas import (
    NetWorthChangeResponse,
    SnapshotCreateRequest,
    SnapshotListResponse,
    SnapshotResponse,
)
from finboard.domain.models import MonthlySnapshot
from finboard.services import AssetService, SnapshotService

router = APIRouter(prefix="/snapshots", tags=["snapshots"])


def _with_change(snapshot: MonthlySnapshot, snapshots: SnapshotService) -> SnapshotResponse:
    response = SnapshotResponse.model_validate(snapshot)
    response.monthly_change = NetWorthChangeResponse.model_validate(snapshots.monthly_change(snapshot))
    return response


@router.post("", response_model=SnapshotResponse, status_code=201)
def create_snapshot(
    request: SnapshotCreateRequest,
    snapshots: SnapshotService = Depends(get_snapshot_service),
    assets: AssetService = Depends(get_asset_service),
) -> SnapshotResponse:
    """Record the user's assets for a month, replacing any earlier snapshot of it."""
    if request.refresh_prices:
        assets.update_prices(request.user_id)
    snapshot = snapshots.create_snapshot(
        request.user_id,
        year=request.year,
        month=request.month,
        note=request.note,
    )
    return _with_change(snapshot, snapshots)


@router.get("", response_model=SnapshotListResponse)
def list_snapshots(
    user_id: str = Query(..., min_length=1),
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> SnapshotListResponse:
    items = snapshots.list_snapshots(user_id)
    return SnapshotListResponse(
        snapshots=[SnapshotResponse.model_validate(s) for s in items],
        count=len(items),
    )


@router.get("/{year}/{month}", response_model=SnapshotResponse)
def get_snapshot(
    year: int,
    month: int,
    user_id: str = Query(..., min_length=1),
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> SnapshotResponse:
    return _with_change(snapshots.get_snapshot(user_id, year, month), snapshots)


@router.delete("/{year}/{month}", status_code=204)
def delete_snapshot(
    year: int,
    month: int,
    user_id: str = Query(..., min_length=1),
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> None:
    snapshots.delete_snapshot(user_id, year, month)
