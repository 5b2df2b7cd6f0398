"""Pydantic schemas for API request/response."""

from finboard.api.schemas.category import (
    SubCategoryRequest,
    CategoryCreateRequest,
    CategoryUpdateRequest,
    SubCategoryResponse,
    CategoryResponse,
    CategoryListResponse,
    CategoryReassignRequest,
    CategoryReassignResponse,
)
from finboard.api.schemas.entry import (
    EntryCreateRequest,
    EntryUpdateRequest,
    EntryResponse,
    EntryListResponse,
    EntryDeleteResponse,
)
from finboard.api.schemas.cashflow import (
    CashflowSummaryResponse,
    GroupTotalResponse,
    BreakdownResponse,
    SankeyNodeResponse,
    SankeyLinkResponse,
    SankeyResponse,
    PeriodTotalsResponse,
    ExpenseStatsResponse,
)
from finboard.api.schemas.asset import (
    AssetCompositionSchema,
    AssetCreateRequest,
    AssetUpdateRequest,
    AssetResponse,
    AssetCreateResponse,
    AssetListResponse,
    TaxSimulationResponse,
)
from finboard.api.schemas.price import (
    QuoteResponse,
    PriceUpdateRequest,
    PriceUpdateResponse,
)
from finboard.api.schemas.snapshot import (
    SnapshotCreateRequest,
    AssetSnapshotResponse,
    SnapshotResponse,
    SnapshotListResponse,
    NetWorthChangeResponse,
)
from finboard.api.schemas.allocation import (
    AllocationTargetSchema,
    AllocationTargetsRequest,
    AllocationTargetsResponse,
    AllocationLineResponse,
    CurrentAllocationResponse,
    AllocationComparisonResponse,
)
from finboard.api.schemas.history import (
    MonthColumnResponse,
    MonthPriceCellResponse,
    AssetPriceHistoryRowResponse,
    TotalRowResponse,
    PriceHistoryResponse,
)

__all__ = [
    "SubCategoryRequest",
    "CategoryCreateRequest",
    "CategoryUpdateRequest",
    "SubCategoryResponse",
    "CategoryResponse",
    "CategoryListResponse",
    "CategoryReassignRequest",
    "CategoryReassignResponse",
    "EntryCreateRequest",
    "EntryUpdateRequest",
    "EntryResponse",
    "EntryListResponse",
    "EntryDeleteResponse",
    "CashflowSummaryResponse",
    "GroupTotalResponse",
    "BreakdownResponse",
    "SankeyNodeResponse",
    "SankeyLinkResponse",
    "SankeyResponse",
    "PeriodTotalsResponse",
    "ExpenseStatsResponse",
    "AssetCompositionSchema",
    "AssetCreateRequest",
    "AssetUpdateRequest",
    "AssetResponse",
    "AssetCreateResponse",
    "AssetListResponse",
    "TaxSimulationResponse",
    "QuoteResponse",
    "PriceUpdateRequest",
    "PriceUpdateResponse",
    "SnapshotCreateRequest",
    "AssetSnapshotResponse",
    "SnapshotResponse",
    "SnapshotListResponse",
    "NetWorthChangeResponse",
    "MonthColumnResponse",
    "MonthPriceCellResponse",
    "AssetPriceHistoryRowResponse",
    "TotalRowResponse",
    "PriceHistoryResponse",
    "AllocationTargetSchema",
    "AllocationTargetsRequest",
    "AllocationTargetsResponse",
    "AllocationLineResponse",
    "CurrentAllocationResponse",
    "AllocationComparisonResponse",
]
