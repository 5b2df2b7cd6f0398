"""SQLAlchemy implementation of AllocationRepository."""

from decimal import Decimal

from sqlalchemy.orm import Session

from finboard.domain.models import AllocationTarget
from finboard.repositories.sqlalchemy.orm_models import AllocationSubTargetORM, AllocationTargetORM


class SqlAlchemyAllocationRepository:
    """SQLAlchemy-backed allocation target repository."""

    def __init__(self, db: Session):
        self._db = db

    def get_targets(self, user_id: str) -> list[AllocationTarget]:
        orm_targets = (
            self._db.query(AllocationTargetORM)
            .filter(AllocationTargetORM.user_id == user_id)
            .order_by(AllocationTargetORM.id)
            .all()
        )
        return [self._to_domain(t) for t in orm_targets]

    def replace_targets(self, user_id: str, targets: list[AllocationTarget]) -> list[AllocationTarget]:
        """Replace all of the user's targets in one transaction."""
        existing = self._db.query(AllocationTargetORM).filter(
            AllocationTargetORM.user_id == user_id
        ).all()
        for orm_target in existing:
            self._db.delete(orm_target)

        for target in targets:
            self._db.add(
                AllocationTargetORM(
                    user_id=user_id,
                    asset_class=target.asset_class,
                    target_percentage=target.target_percentage,
                    sub_targets=[
                        AllocationSubTargetORM(sub_category=name, percentage=percentage)
                        for name, percentage in target.sub_targets.items()
                    ],
                )
            )

        self._db.commit()
        return self.get_targets(user_id)

    @staticmethod
    def _to_domain(orm: AllocationTargetORM) -> AllocationTarget:
        """Convert ORM model to domain model."""
        return AllocationTarget(
            asset_class=orm.asset_class,
            target_percentage=Decimal(str(orm.target_percentage)),
            sub_targets={s.sub_category: Decimal(str(s.percentage)) for s in orm.sub_targets},
        )
