"""Create companies, users, tenant/global expense categories and expenses

Revision ID: 3f1c2a9d7e10
Revises:
Create Date: 2025-11-03 10:12:44.118204

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '3f1c2a9d7e10'
down_revision = None
branch_labels = None
depends_on = None

CATEGORY_TYPES = ("exploitation", "consommable", "investissement", "financier", "exceptionnel")


def _category_columns(create_type: bool):
    return [
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("nom", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("icone", sa.String(10), nullable=True),
        sa.Column(
            "type_global",
            postgresql.ENUM(*CATEGORY_TYPES, name="expense_category_type", create_type=create_type),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # 1) Tenants and users
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_companies_id", "companies", ["id"])
    op.create_index("ix_companies_name", "companies", ["name"])

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.Enum("user", "admin", name="user_role"), nullable=False),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # 2) Tenant-private categories: code unique per tenant among active rows
    op.create_table(
        "expensecategories",
        *_category_columns(create_type=True),
        sa.Column("tenant_id", sa.String(64), nullable=False),
    )
    op.create_index("ix_expensecategories_id", "expensecategories", ["id"])
    op.create_index("ix_expensecategories_tenant_id", "expensecategories", ["tenant_id"])
    op.create_index(
        "ux_expensecategories_tenant_code_active",
        "expensecategories",
        ["tenant_id", "code"],
        unique=True,
        postgresql_where=sa.text("is_active"),
        sqlite_where=sa.text("is_active"),
    )

    # 3) Global categories (reuses the enum type created above): code unique across the table
    op.create_table(
        "globalexpensecategories",
        *_category_columns(create_type=False),
        sa.UniqueConstraint("code", name="uq_globalexpensecategories_code"),
    )
    op.create_index("ix_globalexpensecategories_id", "globalexpensecategories", ["id"])

    # 4) Expenses (read by the category usage check)
    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False),
        sa.Column("numero", sa.String(50), nullable=False, unique=True),
        sa.Column("date", sa.Date(), nullable=False, server_default=sa.func.current_date()),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("expensecategories.id"), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("montant", sa.Numeric(12, 3), nullable=False),
        sa.Column("devise", sa.String(3), nullable=False),
        sa.Column("statut", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_expenses_id", "expenses", ["id"])
    op.create_index("ix_expenses_tenant_id", "expenses", ["tenant_id"])
    op.create_index("ix_expenses_category_id", "expenses", ["category_id"])


def downgrade() -> None:
    op.drop_table("expenses")
    op.drop_table("globalexpensecategories")
    op.drop_table("expensecategories")
    postgresql.ENUM(name="expense_category_type").drop(op.get_bind(), checkfirst=True)
    op.drop_table("users")
    op.drop_table("companies")
    postgresql.ENUM(name="user_role").drop(op.get_bind(), checkfirst=True)
