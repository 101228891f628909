# idcard_api/services/login_log_service.py
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import LoginLog, User
from .base_service import BaseService

logger = logging.getLogger(__name__)


class LoginLogService(BaseService[LoginLog]):
    def __init__(self, db: AsyncSession):
        super().__init__(LoginLog, db)

    async def record(self, user: User, ip_address: str) -> LoginLog:
        entry = LoginLog(
            username=user.username,
            role=user.role,
            school_id=user.school_id,
            ip_address=ip_address,
        )
        self.db.add(entry)
        await self.db.commit()
        logger.info(f"Login recorded for {user.username} ({user.role}) from {ip_address}")
        return entry

    async def list_logs(self, scope: Optional[UUID], page: int = 1, limit: int = 10) -> Dict[str, Any]:
        conditions = [LoginLog.school_id == scope] if scope is not None else []
        return await self.get_paginated(
            page=page,
            limit=limit,
            order_by=[LoginLog.timestamp.desc()],
            conditions=conditions,
        )
