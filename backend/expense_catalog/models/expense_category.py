from sqlalchemy import Column, Integer, String, DateTime, Boolean, Enum, Index, UniqueConstraint, text
from sqlalchemy.orm import validates
from sqlalchemy.sql import func
from ..db import Base
from ..enums import ExpenseCategoryType


class CategoryFieldsMixin:
    """Columns shared by tenant-private and global expense categories."""

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False)
    nom = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    icone = Column(String(10), nullable=True)  # usually an emoji
    type_global = Column(
        Enum(ExpenseCategoryType, name="expense_category_type",
             values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ExpenseCategoryType.EXPLOITATION,
    )
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @validates("code")
    def _normalize_code(self, key, value):
        return value.strip().upper() if value is not None else value


class ExpenseCategory(CategoryFieldsMixin, Base):
    """
    Tenant-private expense category.
    Rows are never physically removed: deletion flips ``is_active`` off, and
    the code is unique per tenant among active rows only.
    """
    __tablename__ = "expensecategories"

    tenant_id = Column(String(64), nullable=False, index=True)

    __table_args__ = (
        Index(
            "ux_expensecategories_tenant_code_active",
            "tenant_id", "code",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )


class GlobalExpenseCategory(CategoryFieldsMixin, Base):
    """
    Expense category shared by every tenant.
    Written through an upsert keyed by ``code``; only the admin path deletes.
    """
    __tablename__ = "globalexpensecategories"

    __table_args__ = (
        UniqueConstraint("code", name="uq_globalexpensecategories_code"),
    )
