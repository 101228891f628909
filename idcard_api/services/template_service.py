# idcard_api/services/template_service.py
"""ID card templates and the Excel sheets generated from them."""
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.cache import CacheManager
from ..core.exceptions import ErrorCode, ServiceError
from ..core.tenancy import ensure_tenant
from ..models import Template
from ..schemas.common import dump_many
from ..schemas.template import TemplateCreate, TemplateOut
from .base_service import BaseService
from .excel_processor import ExcelProcessor
from .school_service import SchoolService

logger = logging.getLogger(__name__)


class TemplateService(BaseService[Template]):
    not_found_message = "Template not found"

    def __init__(self, db: AsyncSession, cache: Optional[CacheManager] = None, cache_ttl: int = 300):
        super().__init__(Template, db)
        self.cache = cache or CacheManager()
        self.cache_ttl = cache_ttl

    async def list_templates(self, scope: Optional[UUID], type: Optional[str] = None) -> List[Dict[str, Any]]:
        """Newest first, serialized; served from redis when it is configured."""
        cache_key = self.cache.make_key("templates", scope or "all", type or "all")
        cached = await self.cache.get(cache_key)
        if cached is not None:
            return cached

        stmt = select(Template)
        if scope is not None:
            stmt = stmt.where(Template.school_id == scope)
        if type:
            stmt = stmt.where(Template.type == type)
        stmt = stmt.order_by(Template.created_at.desc(), Template.id)

        result = await self.db.execute(stmt)
        templates = dump_many(TemplateOut, result.scalars().all())
        await self.cache.set(cache_key, templates, expire=self.cache_ttl)
        return templates

    async def get_template(self, template_id: UUID, scope: Optional[UUID]) -> Template:
        template = await self.get_or_404(template_id)
        ensure_tenant(template.school_id, scope, "Template does not belong to your school")
        return template

    async def active_template(self, type: str, scope: Optional[UUID]) -> Template:
        stmt = select(Template).where(Template.type == type)
        if scope is not None:
            stmt = stmt.where(Template.school_id == scope)
        stmt = stmt.order_by(Template.created_at.desc(), Template.id).limit(1)

        template = (await self.db.execute(stmt)).scalar_one_or_none()
        if template is None:
            raise ServiceError(ErrorCode.NOT_FOUND, f"No template found for type: {type}")
        return template

    async def create_template(self, data: TemplateCreate) -> Template:
        await SchoolService(self.db).require_school(data.school_id)
        template = Template(
            school_id=data.school_id,
            type=data.type,
            layout_config=data.layout_config,
            data_tags=data.data_tags,
        )
        template = await self.save(template)
        await self.cache.delete_pattern(self.cache.make_key("templates", "*"))
        logger.info(f"Created {template.type} template {template.id} for school {template.school_id}")
        return template

    @staticmethod
    def render_excel(template: Template) -> Tuple[str, bytes]:
        if not template.data_tags:
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "Template does not have any data fields defined")
        return f"{template.type}_template.xlsx", ExcelProcessor.generate_template(template.data_tags)

    async def download_excel(self, template_id: UUID, scope: Optional[UUID]) -> Tuple[str, bytes]:
        return self.render_excel(await self.get_template(template_id, scope))

    async def download_excel_by_type(self, type: str, scope: Optional[UUID]) -> Tuple[str, bytes]:
        return self.render_excel(await self.active_template(type, scope))
