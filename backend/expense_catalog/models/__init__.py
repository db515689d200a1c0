# Import and re-export all models so `from expense_catalog import models` exposes them

# Import Base from db module
from ..db import Base

# Import all models from their individual files
from .company import Company
from .user import User
from .expense_category import ExpenseCategory, GlobalExpenseCategory
from .expense import Expense

# Ensure all models are available at package level
__all__ = [
    "Base",
    "Company",
    "User",
    "ExpenseCategory",
    "GlobalExpenseCategory",
    "Expense",
]
