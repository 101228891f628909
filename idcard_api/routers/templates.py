# idcard_api/routers/templates.py
import io
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.cache import CacheManager, get_cache
from ..core.config import Settings
from ..core.database import get_db
from ..core.tenancy import ALL_ROLES, Principal, Role, resolve_scope
from ..schemas.common import dump, envelope
from ..schemas.template import TemplateCreate, TemplateOut, TemplateType
from ..services.excel_processor import XLSX_CONTENT_TYPE
from ..services.template_service import TemplateService
from .deps import get_app_settings, require_roles

router = APIRouter(prefix="/templates", tags=["Templates"])

any_role = require_roles(*ALL_ROLES)


def get_template_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheManager = Depends(get_cache),
    settings: Settings = Depends(get_app_settings),
) -> TemplateService:
    return TemplateService(db, cache, settings.template_cache_ttl)


def excel_response(filename: str, content: bytes) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("")
async def list_templates(
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    type: Optional[TemplateType] = Query(None),
    principal: Principal = Depends(any_role),
    service: TemplateService = Depends(get_template_service),
):
    templates = await service.list_templates(resolve_scope(principal, school_id), type)
    return envelope(templates)


@router.post("", status_code=201)
async def create_template(
    data: TemplateCreate,
    principal: Principal = Depends(require_roles(Role.SUPERADMIN)),
    service: TemplateService = Depends(get_template_service),
):
    template = await service.create_template(data)
    return envelope(dump(TemplateOut, template), "Template created successfully")


@router.get("/active/{type}")
async def get_active_template(
    type: TemplateType,
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    principal: Principal = Depends(any_role),
    service: TemplateService = Depends(get_template_service),
):
    """Most recently created template of a type"""
    template = await service.active_template(type, resolve_scope(principal, school_id))
    return envelope(dump(TemplateOut, template))


@router.get("/download-excel/{type}")
async def download_excel_by_type(
    type: TemplateType,
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    principal: Principal = Depends(any_role),
    service: TemplateService = Depends(get_template_service),
):
    filename, content = await service.download_excel_by_type(type, resolve_scope(principal, school_id))
    return excel_response(filename, content)


@router.get("/{template_id}")
async def get_template(
    template_id: UUID,
    principal: Principal = Depends(any_role),
    service: TemplateService = Depends(get_template_service),
):
    template = await service.get_template(template_id, resolve_scope(principal))
    return envelope(dump(TemplateOut, template))


@router.get("/{template_id}/download-excel")
async def download_excel(
    template_id: UUID,
    principal: Principal = Depends(any_role),
    service: TemplateService = Depends(get_template_service),
):
    """Excel sheet whose columns follow the template's data tags"""
    filename, content = await service.download_excel(template_id, resolve_scope(principal))
    return excel_response(filename, content)
