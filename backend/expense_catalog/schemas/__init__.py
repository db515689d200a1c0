# Auth schemas
from .auth import (
    SignupRequest,
    LoginRequest,
    Token,
    UserResponse,
    CompanyResponse,
    SignupResponse,
    LoginResponse
)

# Category schemas
from .category import (
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
    GlobalExpenseCategoryUpsert,
    GlobalExpenseCategory,
    GlobalExpenseCategoryList
)

# Make all schemas available at package level
__all__ = [
    # Auth
    "SignupRequest",
    "LoginRequest",
    "Token",
    "UserResponse",
    "CompanyResponse",
    "SignupResponse",
    "LoginResponse",
    # Category
    "ExpenseCategoryCreate",
    "ExpenseCategoryUpdate",
    "ExpenseCategoryQuery",
    "ExpenseCategoryResponse",
    "ExpenseCategoryView",
    "ExpenseCategoryListResponse",
    "PaginationMeta",
    "UnionMeta",
    "SeedResponse",
    "MessageResponse",
    "GlobalExpenseCategoryUpsert",
    "GlobalExpenseCategory",
    "GlobalExpenseCategoryList"
]
