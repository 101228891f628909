# idcard_api/services/base_service.py
"""Base service with common CRUD operations."""
import logging
import math
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ErrorCode, ServiceError
from ..models import School

logger = logging.getLogger(__name__)

# Define generic type
T = TypeVar("T")


class BaseService(Generic[T]):
    not_found_code = ErrorCode.NOT_FOUND
    not_found_message = "Resource not found"

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, id: Any) -> T:
        obj = await self.get(id)
        if obj is None:
            raise ServiceError(self.not_found_code, self.not_found_message)
        return obj

    async def get_paginated(
        self,
        page: int = 1,
        limit: int = 10,
        order_by: Sequence[Any] = (),
        conditions: Sequence[Any] = (),
    ) -> Dict[str, Any]:
        """Get one page of rows plus the counts the envelope needs.

        ``id`` is always appended to the ordering so equal sort keys come back
        in the same order on every call.
        """
        offset = (page - 1) * limit

        count_stmt = select(func.count()).select_from(self.model)
        stmt = select(self.model)
        for condition in conditions:
            stmt = stmt.where(condition)
            count_stmt = count_stmt.where(condition)

        total = (await self.db.execute(count_stmt)).scalar() or 0

        stmt = stmt.order_by(*order_by, self.model.id).offset(offset).limit(limit)
        result = await self.db.execute(stmt)
        items: List[T] = list(result.scalars().all())

        return {
            "items": items,
            "total": total,
            "page": page,
            "limit": limit,
            "pages": math.ceil(total / limit) if limit else 0,
        }

    @staticmethod
    def pagination(result: Dict[str, Any]) -> Dict[str, int]:
        return {key: result[key] for key in ("page", "limit", "total", "pages")}

    async def lock_tenant(self, school_id: UUID) -> bool:
        """Take the per-school write lock for the rest of the transaction.

        Every check that spans more than one row of a school (one active
        session, one active teacher per class) runs after this.
        """
        stmt = select(School.id).where(School.id == school_id).with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def save(self, obj: T, conflict: Optional[ServiceError] = None) -> T:
        """Commit pending changes and refresh ``obj``.

        A unique-index violation from a racing writer is rolled back and
        re-raised as ``conflict``.
        """
        self.db.add(obj)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Integrity error on {self.model.__name__}: {e.orig}")
            if conflict is not None:
                raise conflict
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "Request conflicts with existing data")
        await self.db.refresh(obj)
        return obj

    async def hard_delete(self, obj: T, conflict: Optional[ServiceError] = None) -> None:
        """Permanently delete record from database"""
        await self.db.delete(obj)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Delete of {self.model.__name__} blocked: {e.orig}")
            raise conflict or ServiceError(ErrorCode.VALIDATION_ERROR, "Record is still referenced")

    async def exists(self, *conditions: Any) -> bool:
        stmt = select(self.model.id)
        for condition in conditions:
            stmt = stmt.where(condition)
        result = await self.db.execute(stmt.limit(1))
        return result.first() is not None
