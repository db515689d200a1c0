"""
Provenance-tagged category views and identifiers.

The merged listing returns ``TenantSourced`` / ``GlobalSourced`` wrappers
instead of plain rows, and mutation entry points take a parsed
``CategoryRef`` so that global-sourced entries are recognized by type rather
than by inspecting identifier strings in the service layer.

Only the HTTP boundary deals with the public identifier format: tenant
entries are exposed by their row id (``"42"``), global entries as
``"global_<row id>"``.
"""
from dataclasses import dataclass
from typing import Optional, Union

from .. import models
from ..enums import CategorySource, CategoryScope
from ..schemas import ExpenseCategoryView, ExpenseCategoryResponse

GLOBAL_ID_PREFIX = "global_"

# Upper bound of the Integer primary key columns
MAX_ROW_ID = 2**31 - 1


@dataclass(frozen=True)
class TenantSourced:
    record: models.ExpenseCategory

    source = CategorySource.TENANT

    @property
    def public_id(self) -> str:
        return str(self.record.id)


@dataclass(frozen=True)
class GlobalSourced:
    record: models.GlobalExpenseCategory

    source = CategorySource.GLOBAL

    @property
    def public_id(self) -> str:
        return f"{GLOBAL_ID_PREFIX}{self.record.id}"


CategoryView = Union[TenantSourced, GlobalSourced]


@dataclass(frozen=True)
class TenantCategoryRef:
    id: int


@dataclass(frozen=True)
class GlobalCategoryRef:
    id: int


CategoryRef = Union[TenantCategoryRef, GlobalCategoryRef]


def parse_category_ref(raw: str) -> Optional[CategoryRef]:
    """
    Parse a public category identifier.

    Returns None when the identifier is malformed or out of the row id range,
    which callers treat as an unknown category.
    """
    raw = raw.strip()
    target = TenantCategoryRef
    if raw.startswith(GLOBAL_ID_PREFIX):
        raw = raw[len(GLOBAL_ID_PREFIX):]
        target = GlobalCategoryRef
    if not raw.isdecimal():
        return None
    row_id = int(raw)
    if row_id > MAX_ROW_ID:
        return None
    return target(row_id)


def to_view_schema(view: CategoryView) -> ExpenseCategoryView:
    record = view.record
    return ExpenseCategoryView(
        id=view.public_id,
        code=record.code,
        nom=record.nom,
        description=record.description,
        icone=record.icone,
        type_global=record.type_global,
        is_active=record.is_active,
        tenant_id=record.tenant_id if isinstance(view, TenantSourced) else None,
        source=view.source,
        original_id=record.id if isinstance(view, GlobalSourced) else None,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def to_response_schema(record, scope: CategoryScope) -> ExpenseCategoryResponse:
    return ExpenseCategoryResponse(
        id=record.id,
        code=record.code,
        nom=record.nom,
        description=record.description,
        icone=record.icone,
        type_global=record.type_global,
        is_active=record.is_active,
        tenant_id=getattr(record, "tenant_id", None),
        scope=scope,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
