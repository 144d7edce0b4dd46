"""
Public Pydantic schemas used by FastAPI routes, services, and tests.

Schemas are grouped by domain module (production, quality, etc.) and also
include common reusable models such as the error envelope and message response.
"""

from .common import MessageResponse  # noqa: F401
