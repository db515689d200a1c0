from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from ..dependencies import get_db, get_tenant_id
from ..enums import ExpenseCategoryType, CategoryScope, CategorySortField, SortOrder
from ..exceptions import NotFoundError
from ..schemas import (
    ExpenseCategoryCreate,
    ExpenseCategoryUpdate,
    ExpenseCategoryQuery,
    ExpenseCategoryResponse,
    ExpenseCategoryView,
    ExpenseCategoryListResponse,
    PaginationMeta,
    UnionMeta,
    SeedResponse,
    MessageResponse,
)
from ..services.category_refs import CategoryRef, parse_category_ref, to_view_schema, to_response_schema
from ..services.expense_category_service import ExpenseCategoryService

router = APIRouter(
    prefix="/expense-categories",
    tags=["Expense Categories"],
    responses={404: {"description": "Not found"}},
)

MERGE_STRATEGY_HEADER = "X-Source"
MERGE_STRATEGY = "union-global-tenant"


def resolve_ref(category_id: str) -> CategoryRef:
    ref = parse_category_ref(category_id)
    if ref is None:
        raise NotFoundError(f"Category with id {category_id} not found")
    return ref


@router.get("", response_model=ExpenseCategoryListResponse)
def list_expense_categories(
    response: Response,
    q: Optional[str] = Query(None, description="Case-insensitive search in nom or code"),
    type_global: Optional[ExpenseCategoryType] = Query(None, description="Filter by global type"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, description="Items per page (DEFAULT_PAGE_SIZE if omitted, at most MAX_PAGE_SIZE)"),
    sort_by: CategorySortField = Query(CategorySortField.NOM, description="Sort field"),
    sort_order: SortOrder = Query(SortOrder.ASC, description="Sort order"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """
    List the tenant's categories merged with the global catalog.

    Tenant categories replace global ones sharing their code; global entries
    carry a ``global_<id>`` identifier and ``source = global``.
    """
    try:
        filters = ExpenseCategoryQuery(
            q=q, type_global=type_global, page=page, limit=limit,
            sort_by=sort_by, sort_order=sort_order,
        )
    except ValidationError as exc:
        # Page size bounds come from settings; report them like any query error
        raise RequestValidationError([
            {**error, "loc": ("query", *error["loc"])}
            for error in exc.errors(include_url=False, include_context=False)
        ])
    result = ExpenseCategoryService(db).list_union(tenant_id, filters)
    response.headers[MERGE_STRATEGY_HEADER] = MERGE_STRATEGY
    return ExpenseCategoryListResponse(
        data=[to_view_schema(view) for view in result.items],
        pagination=PaginationMeta(
            page=result.page, limit=result.limit, total=result.total, pages=result.pages
        ),
        meta=UnionMeta(
            tenant_count=result.tenant_count,
            global_count=result.global_count,
            union_count=result.union_count,
        ),
    )


@router.post("/seed", response_model=SeedResponse)
def seed_expense_categories(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Add the default categories the tenant does not have yet"""
    result = ExpenseCategoryService(db).seed_default_categories(tenant_id)
    return SeedResponse(
        data=[to_response_schema(record, CategoryScope.TENANT) for record in result.categories],
        inserted=result.inserted,
        already_exists=result.already_exists,
    )


@router.get("/{category_id}", response_model=ExpenseCategoryView)
def get_expense_category(
    category_id: str,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Get one category of the merged view"""
    return to_view_schema(ExpenseCategoryService(db).get(tenant_id, resolve_ref(category_id)))


@router.post("", response_model=ExpenseCategoryResponse, status_code=status.HTTP_201_CREATED)
def create_expense_category(
    category: ExpenseCategoryCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Create a tenant category, or upsert a global one with scope=global"""
    return ExpenseCategoryService(db).create(tenant_id, category)


@router.patch("/{category_id}", response_model=ExpenseCategoryResponse)
def update_expense_category(
    category_id: str,
    category: ExpenseCategoryUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Update a tenant category (global categories are read-only here)"""
    return ExpenseCategoryService(db).update(tenant_id, resolve_ref(category_id), category)


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_expense_category(
    category_id: str,
    force: bool = Query(False, description="Delete even if expenses use the category"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Soft-delete a tenant category"""
    ExpenseCategoryService(db).remove(tenant_id, resolve_ref(category_id), force=force)
    return MessageResponse(message="Category deleted")
