# idcard_api/services/school_service.py
"""Tenant directory: schools and their login gates."""
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ErrorCode, ServiceError
from ..models import AllowedLogin, School
from ..schemas.school import AllowedLoginUpdate, SchoolCreate, SchoolUpdate
from .base_service import BaseService

logger = logging.getLogger(__name__)


class SchoolService(BaseService[School]):
    not_found_message = "School not found"

    def __init__(self, db: AsyncSession):
        super().__init__(School, db)

    async def create_school(self, data: SchoolCreate) -> School:
        school = School(**data.model_dump())
        self.db.add(school)
        await self.db.flush()

        # Every school starts with both roles allowed to sign in
        self.db.add(AllowedLogin(school_id=school.id, allow_school_admin=True, allow_teacher=True))
        await self.save(school)
        logger.info(f"Created school {school.id} ({school.name})")
        return school

    async def list_schools(self, page: int = 1, limit: int = 10, status: Optional[str] = None) -> Dict[str, Any]:
        conditions = [School.status == status] if status else []
        return await self.get_paginated(
            page=page,
            limit=limit,
            order_by=[School.name.asc()],
            conditions=conditions,
        )

    async def update_school(self, school_id: UUID, data: SchoolUpdate) -> School:
        school = await self.get_or_404(school_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(school, key, value)
        return await self.save(school)

    async def delete_school(self, school_id: UUID) -> None:
        school = await self.get_or_404(school_id)
        gate = await self.get_allowed_login(school_id)
        if gate is not None:
            await self.db.delete(gate)
        await self.hard_delete(
            school,
            ServiceError(ErrorCode.VALIDATION_ERROR, "School still has users or roster records"),
        )
        logger.info(f"Deleted school {school_id}")

    async def require_school(self, school_id: UUID) -> School:
        return await self.get_or_404(school_id)

    async def get_allowed_login(self, school_id: UUID) -> Optional[AllowedLogin]:
        stmt = select(AllowedLogin).where(AllowedLogin.school_id == school_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_login_gate(self, school_id: UUID) -> AllowedLogin:
        await self.require_school(school_id)
        gate = await self.get_allowed_login(school_id)
        if gate is None:
            raise ServiceError(ErrorCode.NOT_FOUND, "Login settings not found for this school")
        return gate

    async def update_login_gate(self, school_id: UUID, data: AllowedLoginUpdate) -> AllowedLogin:
        """Upsert the school's login flags."""
        await self.require_school(school_id)
        gate = await self.get_allowed_login(school_id)
        if gate is None:
            gate = AllowedLogin(school_id=school_id, allow_school_admin=True, allow_teacher=True)

        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(gate, key, value)

        self.db.add(gate)
        await self.db.commit()
        await self.db.refresh(gate)
        return gate
