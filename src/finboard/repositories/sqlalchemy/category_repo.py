"""SQLAlchemy implementation of CategoryRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from finboard.domain.models import EntryType, ExpenseCategory, SubCategory
from finboard.repositories.sqlalchemy.orm_models import CategoryORM, SubCategoryORM


class SqlAlchemyCategoryRepository:
    """SQLAlchemy-backed expense category repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, category: ExpenseCategory) -> ExpenseCategory:
        """Persist a new category with its subcategories."""
        orm_category = CategoryORM(
            category_id=category.category_id,
            user_id=category.user_id,
            name=category.name,
            entry_type=category.entry_type,
            color=category.color,
            subcategories=self._subcategories_to_orm(category.subcategories),
        )
        if category.created_at is not None:
            orm_category.created_at = category.created_at
        self._db.add(orm_category)
        self._db.commit()
        self._db.refresh(orm_category)
        return self._to_domain(orm_category)

    def get_by_id(self, category_id: str) -> Optional[ExpenseCategory]:
        """Retrieve category by ID."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.category_id == category_id
        ).first()
        return self._to_domain(orm_category) if orm_category else None

    def list_by_user(
        self,
        user_id: str,
        entry_type: Optional[EntryType] = None,
    ) -> list[ExpenseCategory]:
        """List a user's categories, optionally restricted to one entry type."""
        query = self._db.query(CategoryORM).filter(CategoryORM.user_id == user_id)
        if entry_type is not None:
            query = query.filter(CategoryORM.entry_type == EntryType(entry_type))
        query = query.order_by(CategoryORM.name)
        return [self._to_domain(c) for c in query.all()]

    def update(self, category: ExpenseCategory) -> ExpenseCategory:
        """Update a category, replacing its subcategory list."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.category_id == category.category_id
        ).first()
        if not orm_category:
            raise ValueError(f"Category not found: {category.category_id}")

        orm_category.name = category.name
        orm_category.entry_type = category.entry_type
        orm_category.color = category.color

        # Keep existing rows so unchanged subcategories keep their identity
        existing = {s.subcategory_id: s for s in orm_category.subcategories}
        merged = []
        for position, sub in enumerate(category.subcategories):
            orm_sub = existing.get(sub.subcategory_id)
            if orm_sub is None:
                orm_sub = SubCategoryORM(subcategory_id=sub.subcategory_id)
            orm_sub.name = sub.name
            orm_sub.position = position
            merged.append(orm_sub)
        orm_category.subcategories = merged

        self._db.commit()
        self._db.refresh(orm_category)
        return self._to_domain(orm_category)

    def delete(self, category_id: str) -> None:
        """Delete a category and its subcategories."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.category_id == category_id
        ).first()
        if orm_category:
            self._db.delete(orm_category)
            self._db.commit()

    @staticmethod
    def _subcategories_to_orm(subcategories: list[SubCategory]) -> list[SubCategoryORM]:
        return [
            SubCategoryORM(subcategory_id=sub.subcategory_id, name=sub.name, position=position)
            for position, sub in enumerate(subcategories)
        ]

    @staticmethod
    def _to_domain(orm: CategoryORM) -> ExpenseCategory:
        """Convert ORM model to domain model."""
        return ExpenseCategory(
            category_id=orm.category_id,
            user_id=orm.user_id,
            name=orm.name,
            entry_type=orm.entry_type,
            color=orm.color,
            subcategories=[
                SubCategory(subcategory_id=s.subcategory_id, name=s.name)
                for s in orm.subcategories
            ],
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
