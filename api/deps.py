# api/deps.py
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from core.host import Host
from core.plugin import BookPlugin, bootstrap
from core.sa.database import get_db
from core.sa.repositories import SQLBookRepository, SQLSettingsStore
from core.security import Identity

def get_identity(
    x_user_id: int = Header(default=0, description="Acting user ID"),
    x_user_role: Optional[str] = Header(default=None, description="Acting user's role"),
    x_session_token: str = Header(default="", description="Session token bound into nonces"),
) -> Identity:
    """Identify the caller from request headers; no headers means anonymous"""
    if x_user_id <= 0 or not x_user_role:
        return Identity.anonymous()
    return Identity.for_role(x_user_id, x_user_role.lower(), x_session_token)

def get_host(db: Session = Depends(get_db)) -> Host:
    """Host bound to the request's database session"""
    return Host(books=SQLBookRepository(db), settings_store=SQLSettingsStore(db))

def get_public_plugin(host: Host = Depends(get_host)) -> BookPlugin:
    return bootstrap(host)

def get_admin_plugin(host: Host = Depends(get_host)) -> BookPlugin:
    return bootstrap(host, admin=True)
