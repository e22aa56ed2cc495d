"""Auth API routes — register, login, logout and the current session."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from request_hub.context import SessionContext
from request_hub.database import get_db
from request_hub.dependencies import get_context
from request_hub.schemas.auth import IdentityOut, LoginRequest, RegisterRequest, SessionOut, TokenOut
from request_hub.services import auth_service

router = APIRouter()


@router.post("/register", response_model=IdentityOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create an organizer account (password must be confirmed)."""
    return auth_service.register(
        db=db,
        email=payload.email,
        password=payload.password,
        confirm_password=payload.confirm_password,
    )


@router.post("/login", response_model=TokenOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange credentials for a bearer token."""
    identity, token = auth_service.login(db=db, email=payload.email, password=payload.password)
    return TokenOut(access_token=token, identity=IdentityOut.model_validate(identity))


@router.post("/logout")
def logout(ctx: SessionContext = Depends(get_context)):
    """Revoke the presented token; succeeds even without one."""
    auth_service.logout(ctx)
    return {"status": "ok"}


@router.get("/session", response_model=SessionOut)
def current_session(ctx: SessionContext = Depends(get_context)):
    """Return the caller's identity, or null when anonymous."""
    identity = auth_service.current_identity(ctx)
    return SessionOut(identity=IdentityOut.model_validate(identity) if identity else None)
