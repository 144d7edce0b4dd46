"""
ORM models for facilities, production orders and metrics, quality inspections
and documents, and equipment.

Importing this package ensures model classes are registered with the Base
metadata for Alembic and runtime usage.
"""

# Re-export commonly used models for convenience and to ensure import side-effects
# register all mapped classes with SQLAlchemy metadata.

from .master_data import (  # noqa: F401
    Facility,
)
from .production import (  # noqa: F401
    ProductionOrder,
    ProductionMetric,
)
from .quality import (  # noqa: F401
    QualityInspection,
    QualityDocument,
)
from .equipment import (  # noqa: F401
    Equipment,
)
