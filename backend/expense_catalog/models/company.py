from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..db import Base

class Company(Base):
    """
    A tenant. Category and expense rows reference it through the opaque
    string ``tenant_id`` (``str(company.id)``).
    """
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    users = relationship("User", back_populates="company")

    @property
    def tenant_id(self) -> str:
        return str(self.id)
