# idcard_api/routers/deps.py
"""Shared FastAPI dependencies: settings, the calling principal, role gates."""
from typing import Callable, Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.config import Settings
from ..core.security import authorize
from ..core.tenancy import Principal, Role
from ..schemas.common import PageParams

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_roles(*roles: Role) -> Callable[..., Principal]:
    """Dependency factory: a valid bearer token whose role is one of ``roles``."""

    async def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        settings: Settings = Depends(get_app_settings),
    ) -> Principal:
        token = credentials.credentials if credentials else None
        return authorize(token, roles, settings)

    return dependency


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> PageParams:
    return PageParams(page=page, limit=limit)
