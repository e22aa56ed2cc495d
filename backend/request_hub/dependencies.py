"""FastAPI dependencies shared by the routers."""
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from request_hub.context import SessionContext
from request_hub.database import get_db
from request_hub.services import auth_service

# auto_error=False: anonymous callers still reach the public endpoints
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_context(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> SessionContext:
    """Build the explicit session context for one HTTP request."""
    return SessionContext(
        db=db,
        identity=auth_service.identity_from_token(db, token),
        token=token,
    )
