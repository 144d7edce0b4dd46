"""Initial order management schema.

- facilities
- production_orders
- production_metrics
- quality_inspections
- quality_documents
- equipment

Enumerations are stored as integers. Orders, inspections and equipment block the
deletion of their facility; metrics and documents are removed with their parent.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "4c1d2e7a9b30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "facilities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("code", sa.String(10), nullable=False),
        sa.Column("address", sa.String(200), nullable=True),
        sa.Column("city", sa.String(50), nullable=True),
        sa.Column("state", sa.String(50), nullable=True),
        sa.Column("country", sa.String(20), nullable=True),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_facilities"),
        sa.UniqueConstraint("code", name="uq_facilities_code"),
    )

    op.create_table(
        "production_orders",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("order_number", sa.String(50), nullable=False),
        sa.Column("part_number", sa.String(100), nullable=False),
        sa.Column("part_description", sa.String(200), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("quantity_completed", sa.Integer(), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("scheduled_start_date", sa.DateTime(), nullable=False),
        sa.Column("scheduled_end_date", sa.DateTime(), nullable=False),
        sa.Column("actual_start_date", sa.DateTime(), nullable=True),
        sa.Column("actual_end_date", sa.DateTime(), nullable=True),
        sa.Column("facility_id", sa.Integer(), nullable=False),
        sa.Column("customer_name", sa.String(100), nullable=False),
        sa.Column("customer_order_number", sa.String(50), nullable=True),
        sa.Column("material_type", sa.Integer(), nullable=False),
        sa.Column("estimated_cost", sa.Numeric(18, 2), nullable=False),
        sa.Column("actual_cost", sa.Numeric(18, 2), nullable=False),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("created_date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_production_orders"),
        sa.UniqueConstraint("order_number", name="uq_production_orders_order_number"),
        sa.ForeignKeyConstraint(
            ["facility_id"],
            ["facilities.id"],
            name="fk_production_orders_facility_id_facilities",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_production_orders_status", "production_orders", ["status"])
    op.create_index("ix_production_orders_facility_id", "production_orders", ["facility_id"])
    op.create_index("ix_production_orders_scheduled_end_date", "production_orders", ["scheduled_end_date"])

    op.create_table(
        "production_metrics",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("production_order_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("metric_name", sa.String(100), nullable=False),
        sa.Column("value", sa.Numeric(18, 4), nullable=False),
        sa.Column("unit", sa.String(50), nullable=True),
        sa.Column("target_value", sa.Numeric(18, 4), nullable=True),
        sa.Column("min_value", sa.Numeric(18, 4), nullable=True),
        sa.Column("max_value", sa.Numeric(18, 4), nullable=True),
        sa.Column("is_within_tolerance", sa.Boolean(), nullable=False),
        sa.Column("measured_date", sa.DateTime(), nullable=False),
        sa.Column("measured_by", sa.String(100), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("created_date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_production_metrics"),
        sa.ForeignKeyConstraint(
            ["production_order_id"],
            ["production_orders.id"],
            name="fk_production_metrics_production_order_id_production_orders",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_production_metrics_production_order_id", "production_metrics", ["production_order_id"]
    )

    op.create_table(
        "quality_inspections",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("inspection_number", sa.String(50), nullable=False),
        sa.Column("production_order_id", sa.Integer(), nullable=False),
        sa.Column("facility_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("scheduled_date", sa.DateTime(), nullable=False),
        sa.Column("actual_date", sa.DateTime(), nullable=True),
        sa.Column("inspector_name", sa.String(100), nullable=False),
        sa.Column("inspector_badge", sa.String(50), nullable=True),
        sa.Column("passed", sa.Boolean(), nullable=False),
        sa.Column("results", sa.String(1000), nullable=True),
        sa.Column("non_conformance_notes", sa.String(500), nullable=True),
        sa.Column("corrective_actions", sa.String(500), nullable=True),
        sa.Column("dimension_tolerance", sa.Numeric(10, 4), nullable=True),
        sa.Column("measured_dimension", sa.Numeric(10, 4), nullable=True),
        sa.Column("measurement_unit", sa.String(100), nullable=True),
        sa.Column("defect_count", sa.Integer(), nullable=True),
        sa.Column("certification_required", sa.String(200), nullable=True),
        sa.Column("certification_completed", sa.Boolean(), nullable=False),
        sa.Column("completed_date", sa.DateTime(), nullable=True),
        sa.Column("created_date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_quality_inspections"),
        sa.UniqueConstraint("inspection_number", name="uq_quality_inspections_inspection_number"),
        sa.ForeignKeyConstraint(
            ["production_order_id"],
            ["production_orders.id"],
            name="fk_quality_inspections_production_order_id_production_orders",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["facility_id"],
            ["facilities.id"],
            name="fk_quality_inspections_facility_id_facilities",
            ondelete="RESTRICT",
        ),
    )
    op.create_index(
        "ix_quality_inspections_production_order_id", "quality_inspections", ["production_order_id"]
    )
    op.create_index("ix_quality_inspections_facility_id", "quality_inspections", ["facility_id"])

    op.create_table(
        "quality_documents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("quality_inspection_id", sa.Integer(), nullable=False),
        sa.Column("document_name", sa.String(200), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("file_path", sa.String(500), nullable=True),
        sa.Column("file_extension", sa.String(100), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("approved_by", sa.String(100), nullable=True),
        sa.Column("approved_date", sa.DateTime(), nullable=True),
        sa.Column("is_approved", sa.Boolean(), nullable=False),
        sa.Column("version", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_quality_documents"),
        sa.ForeignKeyConstraint(
            ["quality_inspection_id"],
            ["quality_inspections.id"],
            name="fk_quality_documents_quality_inspection_id_quality_inspections",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_quality_documents_quality_inspection_id", "quality_documents", ["quality_inspection_id"]
    )

    op.create_table(
        "equipment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("equipment_number", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("manufacturer", sa.String(100), nullable=True),
        sa.Column("model", sa.String(100), nullable=True),
        sa.Column("serial_number", sa.String(50), nullable=True),
        sa.Column("installation_date", sa.DateTime(), nullable=False),
        sa.Column("last_maintenance_date", sa.DateTime(), nullable=True),
        sa.Column("next_maintenance_date", sa.DateTime(), nullable=True),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("facility_id", sa.Integer(), nullable=False),
        sa.Column("purchase_cost", sa.Numeric(18, 2), nullable=False),
        sa.Column("operating_hours", sa.Numeric(10, 2), nullable=False),
        sa.Column("maintenance_hours", sa.Numeric(10, 2), nullable=False),
        sa.Column("efficiency_rating", sa.Numeric(5, 2), nullable=False),
        sa.Column("maintenance_notes", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_date", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_equipment"),
        sa.UniqueConstraint("equipment_number", name="uq_equipment_equipment_number"),
        sa.ForeignKeyConstraint(
            ["facility_id"],
            ["facilities.id"],
            name="fk_equipment_facility_id_facilities",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_equipment_facility_id", "equipment", ["facility_id"])


def downgrade() -> None:
    op.drop_index("ix_equipment_facility_id", table_name="equipment")
    op.drop_table("equipment")
    op.drop_index("ix_quality_documents_quality_inspection_id", table_name="quality_documents")
    op.drop_table("quality_documents")
    op.drop_index("ix_quality_inspections_facility_id", table_name="quality_inspections")
    op.drop_index("ix_quality_inspections_production_order_id", table_name="quality_inspections")
    op.drop_table("quality_inspections")
    op.drop_index("ix_production_metrics_production_order_id", table_name="production_metrics")
    op.drop_table("production_metrics")
    op.drop_index("ix_production_orders_scheduled_end_date", table_name="production_orders")
    op.drop_index("ix_production_orders_facility_id", table_name="production_orders")
    op.drop_index("ix_production_orders_status", table_name="production_orders")
    op.drop_table("production_orders")
    op.drop_table("facilities")
