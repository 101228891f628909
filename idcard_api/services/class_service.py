# idcard_api/services/class_service.py
"""Class lifecycle: Unfrozen <-> Frozen. A frozen class locks its students."""
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ErrorCode, ServiceError
from ..core.tenancy import ensure_tenant
from ..models import AcademicSession, ClassModel
from ..schemas.class_schemas import ClassCreate
from .base_service import BaseService

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Class name already exists for this session in your school"
WRONG_TENANT = "Class does not belong to your school"


class ClassService(BaseService[ClassModel]):
    not_found_message = "Class not found"

    def __init__(self, db: AsyncSession):
        super().__init__(ClassModel, db)

    async def create_class(self, data: ClassCreate, scope: Optional[UUID]) -> ClassModel:
        session = await self.db.get(AcademicSession, data.session_id)
        if session is None:
            raise ServiceError(ErrorCode.SESSION_NOT_FOUND, "Session not found")
        ensure_tenant(session.school_id, scope, "Session does not belong to your school")

        await self.lock_tenant(session.school_id)
        await self.db.refresh(session)
        if not session.active_status:
            raise ServiceError(ErrorCode.SESSION_INACTIVE, "Cannot create class in an inactive session")

        if await self.exists(
            ClassModel.school_id == session.school_id,
            ClassModel.session_id == session.id,
            ClassModel.class_name == data.class_name,
        ):
            raise ServiceError(ErrorCode.DUPLICATE_NAME, DUPLICATE_NAME)

        class_obj = ClassModel(
            class_name=data.class_name,
            school_id=session.school_id,
            session_id=session.id,
            frozen=False,
        )
        class_obj = await self.save(class_obj, ServiceError(ErrorCode.DUPLICATE_NAME, DUPLICATE_NAME))
        logger.info(f"Created class {class_obj.class_name} in session {session.id}")
        return class_obj

    async def list_classes(
        self,
        scope: Optional[UUID],
        session_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        conditions = []
        if scope is not None:
            conditions.append(ClassModel.school_id == scope)
        if session_id is not None:
            conditions.append(ClassModel.session_id == session_id)

        return await self.get_paginated(
            page=page,
            limit=limit,
            order_by=[ClassModel.class_name.asc()],
            conditions=conditions,
        )

    async def get_scoped(self, class_id: UUID, scope: Optional[UUID]) -> ClassModel:
        class_obj = await self.get_or_404(class_id)
        ensure_tenant(class_obj.school_id, scope, WRONG_TENANT)
        return class_obj

    async def _lock(self, class_obj: ClassModel):
        await self.lock_tenant(class_obj.school_id)
        await self.db.refresh(class_obj)

    async def freeze(self, class_id: UUID, scope: Optional[UUID]) -> ClassModel:
        class_obj = await self.get_scoped(class_id, scope)
        await self._lock(class_obj)
        if class_obj.frozen:
            raise ServiceError(ErrorCode.ALREADY_FROZEN, "Class is already frozen")

        class_obj.frozen = True
        class_obj = await self.save(class_obj)
        logger.info(f"Froze class {class_obj.id}")
        return class_obj

    async def unfreeze(self, class_id: UUID, scope: Optional[UUID]) -> ClassModel:
        class_obj = await self.get_scoped(class_id, scope)
        await self._lock(class_obj)
        if not class_obj.frozen:
            raise ServiceError(ErrorCode.ALREADY_UNFROZEN, "Class is already unfrozen")

        class_obj.frozen = False
        class_obj = await self.save(class_obj)
        logger.info(f"Unfroze class {class_obj.id}")
        return class_obj

