from typing import List, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
import logging

from .. import models
from ..exceptions import NotFoundError
from ..schemas import GlobalExpenseCategoryUpsert
from .default_categories import DEFAULT_EXPENSE_CATEGORIES, GLOBAL_DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("nom", "description", "icone", "type_global")


def _dialect_insert(db: Session):
    """Return the dialect-specific ``insert`` construct supporting ON CONFLICT."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise RuntimeError(f"Upsert is not supported on the '{dialect}' dialect")
    return insert


def upsert_global_category(db: Session, values: dict, reactivate: bool = False) -> Tuple[models.GlobalExpenseCategory, bool]:
    """
    Insert a global category or overwrite its mutable fields, keyed by code.

    Runs as a single INSERT ... ON CONFLICT statement so concurrent callers
    targeting the same code cannot create duplicates. The caller commits.

    Returns:
        The resulting row and whether it was inserted (informational only).
    """
    code = values["code"].strip().upper()
    existed = db.query(models.GlobalExpenseCategory.id).filter(
        models.GlobalExpenseCategory.code == code
    ).first() is not None

    insert = _dialect_insert(db)
    stmt = insert(models.GlobalExpenseCategory).values(
        code=code,
        **{field: values.get(field) for field in MUTABLE_FIELDS},
    )
    update_set = {field: getattr(stmt.excluded, field) for field in MUTABLE_FIELDS}
    update_set["updated_at"] = func.now()
    if reactivate:
        update_set["is_active"] = True
    stmt = stmt.on_conflict_do_update(
        index_elements=[models.GlobalExpenseCategory.code],
        set_=update_set,
    ).returning(models.GlobalExpenseCategory)

    record = db.scalars(stmt, execution_options={"populate_existing": True}).one()
    return record, not existed


class GlobalCategoryAdmin:
    """
    Privileged operations on the shared category catalog.

    Kept apart from ``ExpenseCategoryService``: tenant-scoped endpoints never
    reach these methods, and deletion here is a hard delete.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_active(self) -> List[models.GlobalExpenseCategory]:
        return self.db.query(models.GlobalExpenseCategory).filter(
            models.GlobalExpenseCategory.is_active.is_(True)
        ).order_by(models.GlobalExpenseCategory.nom).all()

    def upsert(self, payload: GlobalExpenseCategoryUpsert) -> Tuple[models.GlobalExpenseCategory, bool]:
        """Create or overwrite a global category and make sure it is active."""
        record, inserted = upsert_global_category(self.db, payload.model_dump(), reactivate=True)
        self.db.commit()
        logger.info("Global category %s %s", record.code, "created" if inserted else "updated")
        return record, inserted

    def delete(self, code: str) -> None:
        """Remove a global category unconditionally."""
        code = code.strip().upper()
        record = self.db.query(models.GlobalExpenseCategory).filter(
            models.GlobalExpenseCategory.code == code
        ).first()
        if record is None:
            raise NotFoundError(f"Global category '{code}' not found")
        self.db.delete(record)
        self.db.commit()
        logger.info("Global category %s deleted", code)

    def seed_defaults(self) -> Tuple[int, int]:
        """Upsert the default global catalog. Returns (inserted, updated)."""
        inserted = updated = 0
        for values in GLOBAL_DEFAULT_CATEGORIES:
            _, was_inserted = upsert_global_category(self.db, values, reactivate=True)
            if was_inserted:
                inserted += 1
            else:
                updated += 1
        self.db.commit()
        logger.info("Global catalog seeded: %d created, %d updated", inserted, updated)
        return inserted, updated

    def backfill_tenant(self, tenant_id: str) -> Tuple[int, int]:
        """
        Copy the default tenant catalog into one tenant, overwriting the
        mutable fields of codes the tenant already has. Returns (inserted, updated).
        """
        inserted = updated = 0
        for values in DEFAULT_EXPENSE_CATEGORIES:
            record = self.db.query(models.ExpenseCategory).filter(
                models.ExpenseCategory.tenant_id == tenant_id,
                models.ExpenseCategory.code == values["code"],
                models.ExpenseCategory.is_active.is_(True),
            ).first()
            if record is None:
                self.db.add(models.ExpenseCategory(tenant_id=tenant_id, **values))
                inserted += 1
            else:
                for field in MUTABLE_FIELDS:
                    setattr(record, field, values.get(field))
                updated += 1
        self.db.commit()
        logger.info("Backfill for tenant %s: %d created, %d updated", tenant_id, inserted, updated)
        return inserted, updated
