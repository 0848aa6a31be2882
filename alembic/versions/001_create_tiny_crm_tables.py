"""Create companies, products, remit information, invoices and users.

Lines cascade with their parent (remit information, invoice); companies,
products and remit information referenced by invoices are restricted.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("document", sa.String(30), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
    )
    op.create_index("ix_companies_id", "companies", ["id"])

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
    )
    op.create_index("ix_products_id", "products", ["id"])

    op.create_table(
        "remit_information",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
    )
    op.create_index("ix_remit_information_id", "remit_information", ["id"])

    op.create_table(
        "remit_information_lines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("value", sa.String(255), nullable=False),
        sa.Column(
            "remit_information_id",
            sa.Integer(),
            sa.ForeignKey("remit_information.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_remit_information_lines_id", "remit_information_lines", ["id"])
    op.create_index(
        "ix_remit_information_lines_remit_information_id",
        "remit_information_lines",
        ["remit_information_id"],
    )

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("uuid", sa.Uuid(), nullable=False, unique=True),
        sa.Column("number", sa.Integer()),
        sa.Column("additional_information", sa.Text()),
        sa.Column("discount", sa.Numeric(10, 2), nullable=False),
        sa.Column("penalty", sa.Numeric(10, 2), nullable=False),
        sa.Column("paid", sa.Boolean(), nullable=False),
        sa.Column("issue_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "remit_information_id",
            sa.Integer(),
            sa.ForeignKey("remit_information.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False),
    )
    op.create_index("ix_invoices_id", "invoices", ["id"])
    for column in ["remit_information_id", "company_id", "client_id"]:
        op.create_index(f"ix_invoices_{column}", "invoices", [column])

    op.create_table(
        "invoice_lines",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("invoice_id", sa.Integer(), sa.ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(255)),
    )
    op.create_index("ix_invoice_lines_id", "invoice_lines", ["id"])
    op.create_index("ix_invoice_lines_invoice_id", "invoice_lines", ["invoice_id"])
    op.create_index("ix_invoice_lines_product_id", "invoice_lines", ["product_id"])

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)


def downgrade() -> None:
    op.drop_table("users")
    op.drop_table("invoice_lines")
    op.drop_table("invoices")
    op.drop_table("remit_information_lines")
    op.drop_table("remit_information")
    op.drop_table("products")
    op.drop_table("companies")
