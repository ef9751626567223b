"""
Persistence Gateway

Thin wrapper over one request's ``AsyncSession`` for the ``users`` and
``orders`` tables. Statements are built with SQLAlchemy, so values are always
sent as bound parameters.

Writes are only flushed here; the handler decides when the unit of work is
committed. Every call is bounded by a timeout and driver errors are mapped
onto the internal error kinds:

    IntegrityError                    -> StoreConflictError
    timeout / OperationalError / ...  -> StoreUnavailableError
    any other SQLAlchemyError         -> StoreError (unknown)

Author: Khalil Bannouri
Version: 1.0.0
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from cookhouse.exceptions import StoreConflictError, StoreError, StoreUnavailableError
from cookhouse.models import Order, User

logger = logging.getLogger(__name__)


class StoreGateway:
    """Parameterized access to users and orders for one unit of work."""

    def __init__(self, session: AsyncSession, timeout: float = 5.0):
        self.session = session
        self.timeout = timeout

    async def _run(self, operation: str, awaitable: Awaitable[Any]) -> Any:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise StoreUnavailableError(
                f"{operation} timed out after {self.timeout}s"
            ) from e
        except IntegrityError as e:
            raise StoreConflictError(f"{operation} violated a constraint: {e.orig}") from e
        except (OperationalError, InterfaceError, DisconnectionError) as e:
            raise StoreUnavailableError(f"{operation} could not reach the store: {e}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"{operation} failed: {e}") from e

    # =========================================================================
    # USERS
    # =========================================================================

    async def create_user(self, username: str, email: str, password_hash: str) -> None:
        self.session.add(User(username=username, email=email, password_hash=password_hash))
        await self._run("create_user", self.session.flush())
        logger.debug(f"User row staged for {username}")

    async def find_user_by_username(self, username: str) -> Optional[User]:
        result = await self._run(
            "find_user_by_username",
            self.session.execute(select(User).where(User.username == username)),
        )
        return result.scalar_one_or_none()

    # =========================================================================
    # ORDERS
    # =========================================================================

    async def create_order(
        self,
        name: str,
        email: str,
        phone: str,
        quantity: int,
        dish: str,
    ) -> None:
        self.session.add(
            Order(name=name, email=email, phone=phone, quantity=quantity, dish=dish)
        )
        await self._run("create_order", self.session.flush())

    # =========================================================================
    # UNIT OF WORK
    # =========================================================================

    async def commit(self) -> None:
        await self._run("commit", self.session.commit())

    async def rollback(self) -> None:
        """Discard staged writes. Never raises; the session is closed afterwards anyway."""
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback failed, connection will be discarded: {e}")

    async def ping(self) -> None:
        """Cheap round trip used by the health check."""
        await self._run("ping", self.session.execute(text("SELECT 1")))
