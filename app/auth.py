# app/auth.py
"""
Resolves the calling identity for each request.

Sessions and tokens are handled upstream: the auth gateway forwards the
authenticated identity id in the CALLER_HEADER header (X-User-Id by default).
The id is turned into an explicit CallerContext that every service receives.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.exceptions import NotFound
from app.services.access_control import CallerContext
from app.services.identity_service import load_caller_context


def get_caller(request: Request, db: Session = Depends(get_db)) -> CallerContext:
    user_id = request.headers.get(settings.CALLER_HEADER)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {settings.CALLER_HEADER} header",
        )
    try:
        return load_caller_context(db, user_id)
    except NotFound:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown identity")
