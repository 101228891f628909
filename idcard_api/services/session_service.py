# idcard_api/services/session_service.py
"""Academic session lifecycle: Inactive <-> Active, one active per school."""
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ErrorCode, ServiceError
from ..core.tenancy import ensure_tenant
from ..models import AcademicSession
from ..schemas.session import SessionCreate
from .base_service import BaseService
from .school_service import SchoolService

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Session name already exists for this school"
WRONG_TENANT = "Session does not belong to your school"


class SessionService(BaseService[AcademicSession]):
    not_found_message = "Session not found"

    def __init__(self, db: AsyncSession):
        super().__init__(AcademicSession, db)

    async def create_session(self, data: SessionCreate, school_id: UUID) -> AcademicSession:
        await SchoolService(self.db).require_school(school_id)

        if data.start_date >= data.end_date:
            raise ServiceError(ErrorCode.INVALID_DATE_RANGE, "Start date must be before end date")

        if await self.exists(
            AcademicSession.school_id == school_id,
            AcademicSession.session_name == data.session_name,
        ):
            raise ServiceError(ErrorCode.DUPLICATE_NAME, DUPLICATE_NAME)

        session = AcademicSession(
            session_name=data.session_name,
            start_date=data.start_date,
            end_date=data.end_date,
            school_id=school_id,
            active_status=False,
        )
        session = await self.save(session, ServiceError(ErrorCode.DUPLICATE_NAME, DUPLICATE_NAME))
        logger.info(f"Created session {session.session_name} for school {school_id}")
        return session

    async def list_sessions(
        self,
        scope: Optional[UUID],
        session_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        conditions = []
        if scope is not None:
            conditions.append(AcademicSession.school_id == scope)
        if session_id is not None:
            conditions.append(AcademicSession.id == session_id)

        return await self.get_paginated(
            page=page,
            limit=limit,
            order_by=[AcademicSession.start_date.desc()],
            conditions=conditions,
        )

    async def get_scoped(self, session_id: UUID, scope: Optional[UUID]) -> AcademicSession:
        session = await self.get_or_404(session_id)
        ensure_tenant(session.school_id, scope, WRONG_TENANT)
        return session

    async def activate(self, session_id: UUID, scope: Optional[UUID]) -> AcademicSession:
        """Make this the school's only active session."""
        session = await self.get_scoped(session_id, scope)

        await self.lock_tenant(session.school_id)
        await self.db.refresh(session)
        if session.active_status:
            return session

        # Deactivate before activating so the partial unique index never sees two
        await self.db.execute(
            update(AcademicSession)
            .where(
                AcademicSession.school_id == session.school_id,
                AcademicSession.id != session.id,
                AcademicSession.active_status.is_(True),
            )
            .values(active_status=False)
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        session.active_status = True

        session = await self.save(
            session,
            ServiceError(ErrorCode.VALIDATION_ERROR, "Another session was activated concurrently"),
        )
        logger.info(f"Activated session {session.id} for school {session.school_id}")
        return session

    async def deactivate(self, session_id: UUID, scope: Optional[UUID]) -> AcademicSession:
        session = await self.get_scoped(session_id, scope)
        if not session.active_status:
            raise ServiceError(ErrorCode.ALREADY_INACTIVE, "Session is already inactive")

        session.active_status = False
        session = await self.save(session)
        logger.info(f"Deactivated session {session.id}")
        return session
