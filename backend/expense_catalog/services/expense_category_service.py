from dataclasses import dataclass, field
from typing import List
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import logging
import math
import unicodedata

from .. import models
from ..enums import CategoryScope, CategorySortField, SortOrder
from ..exceptions import BadRequestError, ConflictError, NotFoundError
from ..schemas import (
    ExpenseCategoryCreate,
    ExpenseCategoryUpdate,
    ExpenseCategoryQuery,
    ExpenseCategoryResponse,
)
from .category_refs import (
    CategoryRef,
    CategoryView,
    GlobalCategoryRef,
    GlobalSourced,
    TenantSourced,
    to_response_schema,
)
from .default_categories import DEFAULT_EXPENSE_CATEGORIES
from .global_category_admin import upsert_global_category

logger = logging.getLogger(__name__)

# Columns that cannot be cleared through a partial update
NON_NULLABLE_FIELDS = {"nom", "type_global"}


@dataclass
class ListUnionResult:
    """One page of the merged tenant/global listing"""
    items: List[CategoryView]
    page: int
    limit: int
    total: int
    pages: int
    tenant_count: int
    global_count: int
    union_count: int


@dataclass
class SeedResult:
    categories: List[models.ExpenseCategory] = field(default_factory=list)
    inserted: int = 0
    already_exists: int = 0


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def collation_key(value: str) -> str:
    """Accent- and case-insensitive sort key for French labels."""
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def sort_key(sort_by: CategorySortField):
    def key(view: CategoryView):
        value = getattr(view.record, sort_by.value)
        if sort_by == CategorySortField.CREATED_AT:
            primary = value
        else:
            # type_global is a str enum; compare on its value
            primary = collation_key(getattr(value, "value", value))
        # code is unique in the merged list, so ties never depend on fetch order
        return (primary, view.record.code)
    return key


class ExpenseCategoryService:
    """
    Tenant-scoped expense categories: the merged tenant/global view and the
    tenant write path.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _filtered(query, model, filters: ExpenseCategoryQuery):
        query = query.filter(model.is_active.is_(True))
        if filters.q:
            pattern = f"%{escape_like(filters.q)}%"
            query = query.filter(or_(
                model.nom.ilike(pattern, escape="\\"),
                model.code.ilike(pattern, escape="\\"),
            ))
        if filters.type_global:
            query = query.filter(model.type_global == filters.type_global)
        return query

    def list_union(self, tenant_id: str, filters: ExpenseCategoryQuery) -> ListUnionResult:
        """
        List the categories a tenant sees: its own active rows plus the active
        global rows, one entry per code, tenant rows replacing global rows
        that share their code. Sorting and pagination apply to the merged list.
        """
        try:
            tenant_rows = self._filtered(
                self.db.query(models.ExpenseCategory).filter(models.ExpenseCategory.tenant_id == tenant_id),
                models.ExpenseCategory,
                filters,
            ).all()
            global_rows = self._filtered(
                self.db.query(models.GlobalExpenseCategory),
                models.GlobalExpenseCategory,
                filters,
            ).all()
        except SQLAlchemyError:
            logger.exception("Failed to load expense categories for tenant %s", tenant_id)
            raise

        # Globals first so tenant rows overwrite them
        by_code = {}
        for row in global_rows:
            by_code[row.code] = GlobalSourced(row)
        for row in tenant_rows:
            by_code[row.code] = TenantSourced(row)

        merged = sorted(
            by_code.values(),
            key=sort_key(filters.sort_by),
            reverse=filters.sort_order == SortOrder.DESC,
        )

        skip = (filters.page - 1) * filters.limit
        total = len(merged)
        return ListUnionResult(
            items=merged[skip:skip + filters.limit],
            page=filters.page,
            limit=filters.limit,
            total=total,
            pages=math.ceil(total / filters.limit),
            tenant_count=len(tenant_rows),
            global_count=len(global_rows),
            union_count=total,
        )

    def _find_active(self, tenant_id: str, category_id: int):
        return self.db.query(models.ExpenseCategory).filter(
            models.ExpenseCategory.id == category_id,
            models.ExpenseCategory.tenant_id == tenant_id,
            models.ExpenseCategory.is_active.is_(True),
        ).first()

    def _find_active_by_code(self, tenant_id: str, code: str):
        return self.db.query(models.ExpenseCategory).filter(
            models.ExpenseCategory.tenant_id == tenant_id,
            models.ExpenseCategory.code == code,
            models.ExpenseCategory.is_active.is_(True),
        ).first()

    def _get_active(self, tenant_id: str, category_id: int) -> models.ExpenseCategory:
        record = self._find_active(tenant_id, category_id)
        if record is None:
            raise NotFoundError(f"Category with id {category_id} not found")
        return record

    def get(self, tenant_id: str, ref: CategoryRef) -> CategoryView:
        """Fetch one entry of the tenant's view; global entries are read-only."""
        if isinstance(ref, GlobalCategoryRef):
            record = self.db.query(models.GlobalExpenseCategory).filter(
                models.GlobalExpenseCategory.id == ref.id,
                models.GlobalExpenseCategory.is_active.is_(True),
            ).first()
            if record is None:
                raise NotFoundError(f"Global category with id {ref.id} not found")
            return GlobalSourced(record)
        return TenantSourced(self._get_active(tenant_id, ref.id))

    def create(self, tenant_id: str, payload: ExpenseCategoryCreate) -> ExpenseCategoryResponse:
        """
        Create a category for the tenant, or upsert it into the shared catalog
        when ``payload.scope`` is global.

        Raises:
            ConflictError: the tenant already has an active category with this code
        """
        values = payload.model_dump(exclude={"scope"})

        if payload.scope == CategoryScope.GLOBAL:
            record, inserted = upsert_global_category(self.db, values)
            self.db.commit()
            logger.info("Global category %s %s via tenant %s",
                        record.code, "created" if inserted else "updated", tenant_id)
            return to_response_schema(record, CategoryScope.GLOBAL)

        record = models.ExpenseCategory(tenant_id=tenant_id, **values)
        try:
            # The partial unique index on (tenant_id, code) is the conflict signal
            with self.db.begin_nested():
                self.db.add(record)
        except IntegrityError:
            logger.info("Duplicate category code %s for tenant %s", payload.code, tenant_id)
            raise ConflictError(f"A category with code '{payload.code}' already exists for this tenant")
        self.db.commit()
        self.db.refresh(record)
        logger.info("Tenant category %s created for tenant %s", record.code, tenant_id)
        return to_response_schema(record, CategoryScope.TENANT)

    def update(self, tenant_id: str, ref: CategoryRef, payload: ExpenseCategoryUpdate) -> ExpenseCategoryResponse:
        """Apply the provided mutable fields to an active tenant category."""
        if isinstance(ref, GlobalCategoryRef):
            raise BadRequestError("Global categories cannot be modified through this endpoint")

        record = self._get_active(tenant_id, ref.id)
        for name, value in payload.model_dump(exclude_unset=True).items():
            if value is None and name in NON_NULLABLE_FIELDS:
                continue
            setattr(record, name, value)

        self.db.commit()
        self.db.refresh(record)
        logger.info("Tenant category %s updated for tenant %s", record.code, tenant_id)
        return to_response_schema(record, CategoryScope.TENANT)

    def count_usage(self, tenant_id: str, category_id: int) -> int:
        """Number of tenant expenses booked against a category."""
        return self.db.query(models.Expense).filter(
            models.Expense.tenant_id == tenant_id,
            models.Expense.category_id == category_id,
        ).count()

    def remove(self, tenant_id: str, ref: CategoryRef, force: bool = False) -> None:
        """
        Soft-delete a tenant category.

        Raises:
            BadRequestError: global ref, or category still used by expenses without ``force``
            NotFoundError: no active category with this id for the tenant
        """
        if isinstance(ref, GlobalCategoryRef):
            raise BadRequestError("Global categories cannot be deleted through this endpoint")

        record = self._get_active(tenant_id, ref.id)

        usage = self.count_usage(tenant_id, record.id)
        if usage and not force:
            raise BadRequestError(
                f"Category '{record.code}' is used by {usage} expense(s) and cannot be deleted"
            )
        if usage:
            logger.warning("Forced deletion of category %s still used by %d expense(s) (tenant %s)",
                           record.code, usage, tenant_id)

        record.is_active = False
        self.db.commit()
        logger.info("Tenant category %s deleted for tenant %s", record.code, tenant_id)

    def seed_default_categories(self, tenant_id: str) -> SeedResult:
        """
        Give a tenant the default catalog. Codes the tenant already has are
        left untouched, so calling this again never duplicates or overwrites.
        """
        result = SeedResult()
        for values in DEFAULT_EXPENSE_CATEGORIES:
            existing = self._find_active_by_code(tenant_id, values["code"])
            if existing is None:
                record = models.ExpenseCategory(tenant_id=tenant_id, **values)
                try:
                    with self.db.begin_nested():
                        self.db.add(record)
                except IntegrityError:
                    # Inserted concurrently since the lookup
                    existing = self._find_active_by_code(tenant_id, values["code"])
                else:
                    result.categories.append(record)
                    result.inserted += 1
                    continue
            result.categories.append(existing)
            result.already_exists += 1

        self.db.commit()
        logger.info("Seeding done for tenant %s: %d created, %d already present",
                    tenant_id, result.inserted, result.already_exists)
        return result
