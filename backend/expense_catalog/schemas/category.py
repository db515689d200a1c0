import re
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from ..core.settings import get_settings
from ..enums import ExpenseCategoryType, CategoryScope, CategorySource, CategorySortField, SortOrder

CODE_PATTERN = re.compile(r"^[A-Z_]+$")


def normalize_code(value: str) -> str:
    """Trim and upper-case a category code, then check it only holds A-Z and underscores."""
    code = value.strip().upper()
    if not CODE_PATTERN.match(code):
        raise ValueError("code must contain only uppercase letters and underscores")
    return code


class ExpenseCategoryBase(BaseModel):
    code: str = Field(..., max_length=50, examples=["DEP_TRANSPORT"])
    nom: str = Field(..., min_length=1, max_length=100, examples=["Transport & Déplacements"])
    description: Optional[str] = Field(None, max_length=500)
    icone: Optional[str] = Field(None, max_length=10, examples=["🚗"])
    type_global: ExpenseCategoryType

    @field_validator("code")
    @classmethod
    def _normalize_code(cls, value: str) -> str:
        return normalize_code(value)


class ExpenseCategoryCreate(ExpenseCategoryBase):
    """Payload for creating a tenant category, or upserting a global one when scope is global"""
    scope: CategoryScope = CategoryScope.TENANT

    @field_validator("scope", mode="before")
    @classmethod
    def _accept_global_alias(cls, value):
        if isinstance(value, str) and value.lower() == "global":
            return CategoryScope.GLOBAL
        return value


class ExpenseCategoryUpdate(BaseModel):
    """Partial update; code and tenant are immutable"""
    nom: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    icone: Optional[str] = Field(None, max_length=10)
    type_global: Optional[ExpenseCategoryType] = None


class ExpenseCategoryQuery(BaseModel):
    """Filters, sorting and pagination for the merged category listing"""
    q: Optional[str] = Field(None, description="Case-insensitive substring of nom or code")
    type_global: Optional[ExpenseCategoryType] = None
    page: int = Field(1, ge=1)
    limit: Optional[int] = Field(None, ge=1, validate_default=True)
    sort_by: CategorySortField = CategorySortField.NOM
    sort_order: SortOrder = SortOrder.ASC

    @field_validator("limit")
    @classmethod
    def _apply_page_size_settings(cls, value: Optional[int]) -> int:
        settings = get_settings()
        if value is None:
            return settings.default_page_size
        if value > settings.max_page_size:
            raise ValueError(f"limit must be at most {settings.max_page_size}")
        return value


class ExpenseCategoryResponse(BaseModel):
    """A stored category row, tagged with the scope it was written to"""
    id: int
    code: str
    nom: str
    description: Optional[str] = None
    icone: Optional[str] = None
    type_global: ExpenseCategoryType
    is_active: bool
    tenant_id: Optional[str] = None
    scope: CategoryScope
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ExpenseCategoryView(BaseModel):
    """One entry of the merged tenant/global listing"""
    id: str = Field(description="Row id for tenant entries, 'global_<id>' for global entries")
    code: str
    nom: str
    description: Optional[str] = None
    icone: Optional[str] = None
    type_global: ExpenseCategoryType
    is_active: bool
    tenant_id: Optional[str] = None
    source: CategorySource
    original_id: Optional[int] = Field(None, description="Underlying global row id")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PaginationMeta(BaseModel):
    """Pagination metadata"""
    page: int = Field(ge=1, description="Current page number")
    limit: int = Field(ge=1, description="Items per page")
    total: int = Field(ge=0, description="Number of merged entries")
    pages: int = Field(ge=0, description="Total number of pages")


class UnionMeta(BaseModel):
    """Diagnostic counts of the tenant/global merge"""
    tenant_count: int
    global_count: int
    union_count: int


class ExpenseCategoryListResponse(BaseModel):
    data: List[ExpenseCategoryView]
    pagination: PaginationMeta
    meta: UnionMeta


class SeedResponse(BaseModel):
    data: List[ExpenseCategoryResponse]
    inserted: int
    already_exists: int


class MessageResponse(BaseModel):
    message: str


class GlobalExpenseCategoryUpsert(ExpenseCategoryBase):
    """Admin payload for creating or overwriting a global category"""
    pass


class GlobalExpenseCategory(BaseModel):
    id: int
    code: str
    nom: str
    description: Optional[str] = None
    icone: Optional[str] = None
    type_global: ExpenseCategoryType
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class GlobalExpenseCategoryList(BaseModel):
    data: List[GlobalExpenseCategory]
