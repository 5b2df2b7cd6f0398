"""Asset allocation endpoints."""

from fastapi import APIRouter, Depends, Query

from finboard.api.deps import get_allocation_service
from finboard.api.schemas import (
    AllocationComparisonResponse,
    AllocationTargetSchema,
    AllocationTargetsRequest,
    AllocationTargetsResponse,
    CurrentAllocationResponse,
)
from finboard.domain.models import AllocationTarget
from finboard.services import AllocationService

router = APIRouter(prefix="/allocation", tags=["allocation"])


def _targets_response(targets: list[AllocationTarget]) -> AllocationTargetsResponse:
    return AllocationTargetsResponse(
        targets=[AllocationTargetSchema.model_validate(t) for t in targets]
    )


@router.get("", response_model=AllocationComparisonResponse)
def compare_allocation(
    user_id: str = Query(..., min_length=1),
    allocation: AllocationService = Depends(get_allocation_service),
) -> AllocationComparisonResponse:
    """Current allocation against the user's targets (defaults if none are saved)."""
    return AllocationComparisonResponse.model_validate(allocation.compare(user_id))


@router.get("/current", response_model=CurrentAllocationResponse)
def current_allocation(
    user_id: str = Query(..., min_length=1),
    allocation: AllocationService = Depends(get_allocation_service),
) -> CurrentAllocationResponse:
    return CurrentAllocationResponse.model_validate(allocation.current(user_id))


@router.get("/targets", response_model=AllocationTargetsResponse)
def get_targets(
    user_id: str = Query(..., min_length=1),
    allocation: AllocationService = Depends(get_allocation_service),
) -> AllocationTargetsResponse:
    return _targets_response(allocation.get_targets(user_id))


@router.put("/targets", response_model=AllocationTargetsResponse)
def set_targets(
    request: AllocationTargetsRequest,
    allocation: AllocationService = Depends(get_allocation_service),
) -> AllocationTargetsResponse:
    """Replace the user's targets; class targets and any sub-targets must each sum to 100."""
    targets = [
        AllocationTarget(
            asset_class=t.asset_class,
            target_percentage=t.target_percentage,
            sub_targets=dict(t.sub_targets),
        )
        for t in request.targets
    ]
    return _targets_response(allocation.set_targets(request.user_id, targets))
