# idcard_api/routers/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..core.database import get_db
from ..core.tenancy import ALL_ROLES, Principal
from ..schemas.auth import GoogleLoginRequest, LoginRequest
from ..services.auth_service import AuthService, client_ip
from ..services.google_identity import GoogleIdentityVerifier, get_google_verifier
from .deps import get_app_settings, require_roles

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login")
async def login(
    data: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Email and password sign-in"""
    result = await AuthService(db, settings).authenticate(data.email, data.password, client_ip(request))
    return {"success": True, **result}


@router.post("/google")
async def google_login(
    data: GoogleLoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    verifier: GoogleIdentityVerifier = Depends(get_google_verifier),
):
    """Sign in with a Google ID token; first-time users become teachers"""
    claims = await verifier.verify(data.id_token)
    result = await AuthService(db, settings).authenticate_federated(claims, client_ip(request))
    return {"success": True, **result}


@router.get("/me")
async def me(
    principal: Principal = Depends(require_roles(*ALL_ROLES)),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = await AuthService(db, settings).current_user(principal)
    return {"success": True, "user": user}
