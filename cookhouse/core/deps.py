"""
FastAPI dependencies.

Long-lived collaborators live on ``app.state`` (set up by ``create_app``);
these helpers hand them to request handlers.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cookhouse.core.config import Settings
from cookhouse.core.security import PasswordHasher
from cookhouse.database import get_db
from cookhouse.services.notifications import BaseMailTransport, NotificationDispatcher
from cookhouse.services.store import StoreGateway


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> StoreGateway:
    return StoreGateway(session, timeout=settings.db_timeout_seconds)


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher


def get_mail_transport(request: Request) -> BaseMailTransport:
    return request.app.state.mail_transport


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher
