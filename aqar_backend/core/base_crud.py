"""
Base CRUD operations for consistent data access patterns across all modules.

Records are keyed by a client-supplied string ``id``. None of these helpers
commit: callers own the transaction boundary.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

# Generic type variable for type safety
ModelType = TypeVar("ModelType")


class BaseCRUD(Generic[ModelType]):
    """
    Base CRUD class providing common database operations.

    Attributes:
        model: SQLAlchemy model class
        default_relationships: Relationships eager-loaded by ``get_multi``
        default_order_by: Default ordering field
    """

    def __init__(
        self,
        model: type[ModelType],
        default_relationships: list[str] | None = None,
        default_order_by: str = "created_at",
    ):
        self.model = model
        self.default_relationships = default_relationships or []
        self.default_order_by = default_order_by

    def _apply_custom_filters(
        self, query: Select, filters: dict[str, Any] | None = None
    ) -> Select:
        """Apply equality filters on model columns."""
        if not filters:
            return query

        for field_name, value in filters.items():
            if hasattr(self.model, field_name):
                field = getattr(self.model, field_name)
                query = query.where(field == value)
        return query

    def _apply_relationships(
        self, query: Select, load_relationships: list[str] | None = None
    ) -> Select:
        """Apply relationship loading."""
        relationships = (
            self.default_relationships
            if load_relationships is None
            else load_relationships
        )
        for relationship_name in relationships:
            relationship = getattr(self.model, relationship_name)
            query = query.options(selectinload(relationship))
        return query

    def _apply_ordering(self, query: Select, order_by: str | None = None) -> Select:
        """Apply ordering, with the primary key as tie-breaker."""
        order_field = order_by or self.default_order_by
        if hasattr(self.model, order_field):
            query = query.order_by(getattr(self.model, order_field))
        return query.order_by(self.model.id)

    async def get(
        self,
        db: AsyncSession,
        id: str,
        load_relationships: list[str] | None = None,
    ) -> ModelType | None:
        """
        Get a single record by id.

        Args:
            db: Database session
            id: Record ID
            load_relationships: Relationships to eager load

        Returns:
            The model instance or None if not found
        """
        query = select(self.model).where(self.model.id == id)
        query = self._apply_relationships(query, load_relationships or [])

        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by(self, db: AsyncSession, **filters) -> ModelType | None:
        """Get the first record matching equality filters."""
        query = self._apply_custom_filters(select(self.model), filters)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
        load_relationships: list[str] | None = None,
        order_by: str | None = None,
    ) -> list[ModelType]:
        """
        Get all records matching the filters.

        Args:
            db: Database session
            filters: Equality filters to apply
            load_relationships: Relationships to eager load (defaults to
                ``default_relationships``)
            order_by: Field to order by

        Returns:
            List of records
        """
        query = select(self.model)
        query = self._apply_custom_filters(query, filters)
        query = self._apply_relationships(query, load_relationships)
        query = self._apply_ordering(query, order_by)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def upsert(
        self,
        db: AsyncSession,
        id: str,
        values: dict[str, Any],
        existing: ModelType | None = None,
    ) -> tuple[ModelType, bool]:
        """
        Create the record if absent, else overwrite every supplied field.

        Args:
            db: Database session
            id: Record ID
            values: Column values, without ``id``
            existing: Already-loaded record, saves a lookup

        Returns:
            Tuple of (record, created)
        """
        db_obj = existing if existing is not None else await self.get(db, id)
        created = db_obj is None

        if created:
            db_obj = self.model(id=id, **values)
            db.add(db_obj)
        else:
            for field, value in values.items():
                setattr(db_obj, field, value)

        await db.flush()
        return db_obj, created

    async def delete_by_id(self, db: AsyncSession, id: str) -> int:
        """Delete one record by id. Returns the number of rows removed."""
        result = await db.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount

    async def count(self, db: AsyncSession, **filters) -> int:
        """
        Count records matching equality filters.

        Returns:
            Count of matching records
        """
        query = select(func.count()).select_from(self.model)
        query = self._apply_custom_filters(query, filters)

        result = await db.execute(query)
        return result.scalar() or 0
