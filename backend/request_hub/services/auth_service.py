"""Session/identity gate — registration, login, logout and token resolution.

Passwords are hashed with passlib; bearer tokens are HS256 JWTs carrying
the user id, email and a unique ``jti`` so that logout can revoke one
token without touching the others.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import status
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from request_hub.config import settings
from request_hub.context import Identity, SessionContext
from request_hub.database import backend_call
from request_hub.errors import AuthError, ValidationError
from request_hub.models.revoked_token import RevokedToken
from request_hub.models.user import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def _identity(user: User) -> Identity:
    return Identity(user_id=user.user_id, email=user.email)


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def create_access_token(identity: Identity) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": identity.user_id,
        "email": identity.email,
        "jti": str(uuid.uuid4()),
        "exp": expire,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    """Return the token claims, or None if the token is malformed or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def register(db: Session, email: Optional[str], password: Optional[str],
             confirm_password: Optional[str]) -> Identity:
    """Create an organizer account.

    Input is checked locally before the database is touched; a duplicate
    email is reported as an ``AuthError``.
    """
    email = _normalize_email(email)
    if not email:
        raise ValidationError("Email is required")
    if not password:
        raise ValidationError("Password is required")
    if password != confirm_password:
        raise ValidationError("Passwords do not match")

    with backend_call(db, "registering user"):
        if db.query(User).filter(User.email == email).first():
            raise AuthError("An account with this email already exists", status_code=status.HTTP_409_CONFLICT)
        user = User(email=email, password_hash=hash_password(password))
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise AuthError("An account with this email already exists", status_code=status.HTTP_409_CONFLICT)
        db.refresh(user)

    logger.info("Registered user %s (%s)", user.user_id, email)
    return _identity(user)


def login(db: Session, email: Optional[str], password: Optional[str]) -> tuple[Identity, str]:
    """Check credentials and return the identity with a fresh access token."""
    email = _normalize_email(email)
    with backend_call(db, "logging in"):
        user = db.query(User).filter(User.email == email).first() if email else None

    if not user or not password or not verify_password(password, user.password_hash):
        logger.warning("Rejected login for %s", email or "<empty>")
        raise AuthError(INVALID_CREDENTIALS)

    identity = _identity(user)
    logger.info("User %s logged in", identity.user_id)
    return identity, create_access_token(identity)


def identity_from_token(db: Session, token: Optional[str]) -> Optional[Identity]:
    """Resolve a bearer token to an identity; None for anything not valid."""
    if not token:
        return None
    claims = decode_access_token(token)
    if not claims or not claims.get("sub") or not claims.get("jti"):
        return None

    with backend_call(db, "resolving session"):
        if db.query(RevokedToken).filter(RevokedToken.jti == claims["jti"]).first():
            return None
        user = db.query(User).filter(User.user_id == claims["sub"]).first()
    return _identity(user) if user else None


def current_identity(ctx: SessionContext) -> Optional[Identity]:
    return ctx.identity


def logout(ctx: SessionContext) -> None:
    """Revoke the context's token and clear its identity.

    Logging out without a usable token is not an error.
    """
    claims = decode_access_token(ctx.token) if ctx.token else None
    jti = claims.get("jti") if claims else None

    if jti:
        with backend_call(ctx.db, "logging out"):
            if not ctx.db.query(RevokedToken).filter(RevokedToken.jti == jti).first():
                ctx.db.add(RevokedToken(jti=jti))
                ctx.db.commit()
        logger.info("User %s logged out", claims.get("sub"))

    ctx.identity = None
    ctx.token = None
    ctx.active_event = None
