"""
API route modules for the order management service.

This package contains subrouters for:
- Production orders and production metrics
- Facilities
- Equipment
- Quality inspections and quality documents
- Reports (CSV/XLSX/PDF exports)

Routers are included from src.api.main (under the /api prefix).
"""
