from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from .. import models
from ..dependencies import get_db, require_admin
from ..schemas import (
    GlobalExpenseCategoryUpsert,
    GlobalExpenseCategory,
    GlobalExpenseCategoryList,
    MessageResponse,
)
from ..services.global_category_admin import GlobalCategoryAdmin

router = APIRouter(
    prefix="/admin/global-expense-categories",
    tags=["Admin"],
    responses={403: {"description": "Administrator role required"}},
)


@router.get("", response_model=GlobalExpenseCategoryList)
def list_global_categories(
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin)
):
    """List active global categories by name"""
    records = GlobalCategoryAdmin(db).list_active()
    return GlobalExpenseCategoryList(data=[GlobalExpenseCategory.model_validate(r) for r in records])


@router.post("", response_model=GlobalExpenseCategory, status_code=status.HTTP_201_CREATED)
def upsert_global_category(
    category: GlobalExpenseCategoryUpsert,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin)
):
    """Create or overwrite a global category by code"""
    record, _ = GlobalCategoryAdmin(db).upsert(category)
    return record


@router.delete("/{code}", response_model=MessageResponse)
def delete_global_category(
    code: str,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin)
):
    """Permanently delete a global category"""
    GlobalCategoryAdmin(db).delete(code)
    return MessageResponse(message=f"Global category {code.upper()} deleted")
