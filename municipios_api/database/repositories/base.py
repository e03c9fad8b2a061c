"""
Base repository with common CRUD operations.
"""
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from municipios_api.database.connection import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common database operations."""

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        """
        Initialize repository with session and model class.

        Args:
            session: SQLAlchemy async session
            model: SQLAlchemy model class
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """
        Get a single record by ID.

        Args:
            id: Record primary key

        Returns:
            Model instance or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[ModelType]:
        """
        Get all records ordered by ID.

        Returns:
            List of model instances
        """
        result = await self.session.execute(
            select(self.model).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def create_many(self, objs: List[ModelType]) -> List[ModelType]:
        """
        Create several records in one flush.

        Args:
            objs: Model instances to create

        Returns:
            The created instances
        """
        self.session.add_all(objs)
        await self.session.flush()
        return objs

    async def update(self, obj: ModelType) -> ModelType:
        """
        Update an existing record.

        Args:
            obj: Model instance with updated values

        Returns:
            Updated model instance
        """
        await self.session.flush()
        await self.session.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """
        Delete a record.

        Args:
            obj: Model instance to delete
        """
        await self.session.delete(obj)
        await self.session.flush()

    async def delete_by_id(self, id: Any) -> bool:
        """
        Delete a record by ID.

        Args:
            id: Record primary key

        Returns:
            True if deleted, False if not found
        """
        obj = await self.get_by_id(id)
        if obj:
            await self.delete(obj)
            return True
        return False

    async def delete_all(self) -> int:
        """
        Delete every record.

        Returns:
            Number of rows removed
        """
        result = await self.session.execute(delete(self.model))
        return result.rowcount or 0

    async def count(self) -> int:
        """
        Count all records.

        Returns:
            Total number of records
        """
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()
