"""create vendor aggregate tables

Revision ID: 0001_vendor_tables
Revises:
Create Date: 2026-10-19 00:00:00
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_vendor_tables"
down_revision = None
branch_labels = None
depends_on = None


def _vendor_fk() -> sa.Column:
    return sa.Column(
        "vendor_id",
        sa.String(length=36),
        sa.ForeignKey("vendor_master.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def _flag(kind: str) -> list[sa.Column]:
    return [
        sa.Column(f"{kind}_verified", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(f"{kind}_verified_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "vendor_master",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False, index=True),
        sa.Column("trade_name", sa.String(length=255), nullable=True),
        sa.Column("email_id", sa.String(length=255), nullable=True, index=True),
        sa.Column("phone_number", sa.String(length=50), nullable=True),
        sa.Column("type_of_organization", sa.String(length=100), nullable=True),
        sa.Column("nature_of_business", sa.String(length=255), nullable=True),
        sa.Column("working_hours", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "vendor_banking_details",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _vendor_fk(),
        sa.Column("bank_name", sa.String(length=255), nullable=True),
        sa.Column("branch_address", sa.Text(), nullable=True),
        sa.Column("branch_phone_number", sa.String(length=50), nullable=True),
        sa.Column("account_number", sa.String(length=50), nullable=True),
        sa.Column("type_of_account", sa.String(length=50), nullable=True),
        sa.Column("ifsc_code", sa.String(length=20), nullable=True),
    )
    op.create_table(
        "vendor_identification",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _vendor_fk(),
        sa.Column("pan_number", sa.String(length=20), nullable=True),
        sa.Column("aadhar_number", sa.String(length=20), nullable=True),
        sa.Column("gst_number", sa.String(length=20), nullable=True),
        sa.Column("pf_registration_number", sa.String(length=50), nullable=True),
        sa.Column("esic_registration_number", sa.String(length=50), nullable=True),
    )
    op.create_table(
        "vendor_verifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _vendor_fk(),
        *_flag("pan"),
        *_flag("aadhar"),
        *_flag("gst"),
        *_flag("bank_details"),
    )
    op.create_table(
        "vendor_custom_fields",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _vendor_fk(),
        sa.Column("field_name", sa.String(length=255), nullable=False),
        sa.Column("field_value", sa.Text(), nullable=True),
    )
    op.create_table(
        "vendor_documents",
        sa.Column("id", sa.String(length=36), primary_key=True),
        _vendor_fk(),
        sa.Column(
            "document_type",
            sa.Enum(
                "cancelled_cheque", "pan_card", "gst", "other",
                name="vendor_document_type",
                native_enum=False,
                create_constraint=True,
                length=32,
            ),
            nullable=False,
        ),
        sa.Column("file_url", sa.String(length=1024), nullable=False),
        sa.Column("file_key", sa.String(length=512), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    for table in (
        "vendor_documents",
        "vendor_custom_fields",
        "vendor_verifications",
        "vendor_identification",
        "vendor_banking_details",
        "vendor_master",
    ):
        op.drop_table(table)
