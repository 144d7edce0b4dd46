from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.settings import AppSettings, get_app_settings
from src.db.session import get_async_session
from src.services.production import ProductionOrderService


# PUBLIC_INTERFACE
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield the request-scoped AsyncSession.

    Tests override this dependency to point the app at their own engine.
    """
    async for session in get_async_session():
        yield session


# PUBLIC_INTERFACE
def get_order_service(
    session: AsyncSession = Depends(get_db_session),
    settings: AppSettings = Depends(get_app_settings),
) -> ProductionOrderService:
    """Build the production order service for the current request."""
    return ProductionOrderService(
        session,
        critical_window_days=settings.CRITICAL_WINDOW_DAYS,
        schedule_buffer_hours=settings.SCHEDULE_BUFFER_HOURS,
    )
