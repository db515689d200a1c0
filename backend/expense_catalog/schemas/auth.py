from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from ..enums import UserRole

class SignupRequest(BaseModel):
    """Opens a new tenant (company) with its first user"""
    email: EmailStr
    password: str = Field(..., min_length=8)
    company_name: str = Field(..., min_length=1, max_length=200)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str

class UserResponse(BaseModel):
    id: int
    email: str
    role: UserRole
    company_id: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}

class CompanyResponse(BaseModel):
    id: int
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}

class SignupResponse(BaseModel):
    user: UserResponse
    company: CompanyResponse
    access_token: str
    token_type: str

class LoginResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str
