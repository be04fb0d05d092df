from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response

from shop_inventory.api.deps import get_auth_service, get_settings, session_token
from shop_inventory.config import Settings
from shop_inventory.services.auth_service import AuthService, InvalidCredentials

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", summary="Current session user")
def me(request: Request, svc: AuthService = Depends(get_auth_service)):
    identity = svc.current_user(session_token(request))
    return {"user": identity.model_dump() if identity else None}


@router.post("/login", summary="Log in and start a session")
def login(
    response: Response,
    payload: dict = Body(...),
    svc: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """
    payload: { "email": "admin@example.com", "password": "..." }
    """
    email = payload.get("email")
    password = payload.get("password")
    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        raise HTTPException(status_code=400, detail="Email and password are required.")
    try:
        token = svc.login(email, password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e))
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return {"ok": True}


@router.post("/logout", summary="End the current session")
def logout(
    request: Request,
    response: Response,
    svc: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    svc.logout(session_token(request))
    response.delete_cookie(settings.SESSION_COOKIE_NAME, httponly=True, samesite="lax")
    return {"ok": True}
