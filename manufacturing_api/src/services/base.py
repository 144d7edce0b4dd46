from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession


class BaseService:
    """
    Base class for services. Holds the request session shared by the repositories
    a service composes; business rules live in the service, queries in repositories.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
