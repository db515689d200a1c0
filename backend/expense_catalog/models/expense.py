from sqlalchemy import Column, Integer, String, DateTime, Date, Numeric, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..db import Base


class Expense(Base):
    """
    A tenant expense booked against a tenant expense category.
    Only the category usage check reads this table here.
    """
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(64), nullable=False, index=True)
    numero = Column(String(50), nullable=False, unique=True)
    date = Column(Date, nullable=False, server_default=func.current_date())
    category_id = Column(Integer, ForeignKey("expensecategories.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    montant = Column(Numeric(12, 3), nullable=False)
    devise = Column(String(3), nullable=False, default="TND")
    statut = Column(String(20), nullable=False, default="brouillon")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category = relationship("ExpenseCategory")
