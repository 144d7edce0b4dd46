"""
Repository layer for data access.

Repositories encapsulate SQLAlchemy queries and patterns for each domain area.
They operate on the request-scoped AsyncSession provided by
src.core.deps.get_db_session.
"""
