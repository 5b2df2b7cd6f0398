"""Asset repository protocol."""

from typing import Protocol, Optional

from finboard.domain.models import Asset


class AssetRepository(Protocol):
    """Interface for asset data access."""

    def create(self, asset: Asset) -> Asset:
        ...

    def get_by_id(self, asset_id: str) -> Optional[Asset]:
        ...

    def list_by_user(self, user_id: str) -> list[Asset]:
        """List a user's current assets, ordered by ticker."""
        ...

    def update(self, asset: Asset) -> Asset:
        ...

    def delete(self, asset_id: str) -> None:
        ...
