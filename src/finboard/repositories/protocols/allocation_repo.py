"""Allocation target repository protocol."""

from typing import Protocol

from finboard.domain.models import AllocationTarget


class AllocationRepository(Protocol):
    """Interface for a user's asset allocation targets."""

    def get_targets(self, user_id: str) -> list[AllocationTarget]:
        """Return the user's targets, or an empty list if none were saved."""
        ...

    def replace_targets(self, user_id: str, targets: list[AllocationTarget]) -> list[AllocationTarget]:
        """Replace all of the user's targets."""
        ...
