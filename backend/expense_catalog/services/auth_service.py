from datetime import timedelta
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
import logging

from .. import models
from ..auth import (
    authenticate_user as auth_authenticate_user,
    create_user_and_company as auth_create_user_and_company,
    create_access_token as auth_create_access_token,
    ACCESS_TOKEN_EXPIRE_MINUTES
)
from ..schemas import SignupRequest, LoginRequest, SignupResponse, LoginResponse, UserResponse, CompanyResponse

logger = logging.getLogger(__name__)

TOKEN_TYPE = "bearer"


def _email_taken() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")


class AuthService:
    """Tenant onboarding and login."""

    @staticmethod
    def check_user_exists(db: Session, email: str) -> bool:
        return db.query(models.User.id).filter(models.User.email == email).first() is not None

    @staticmethod
    def create_access_token_for_user(user: models.User) -> str:
        """Issue a token carrying the user's tenant and role."""
        return auth_create_access_token(
            data={
                "sub": user.email,
                "user_id": user.id,
                "tenant_id": user.tenant_id,
                "role": user.role.value,
            },
            expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
        )

    @staticmethod
    def signup_user(db: Session, request: SignupRequest) -> SignupResponse:
        """
        Open a tenant: create the company and its first (non-admin) user.

        Raises:
            HTTPException: 400 if the email is already registered, including
                when a concurrent signup wins the unique email index
        """
        if AuthService.check_user_exists(db, request.email):
            db.rollback()
            raise _email_taken()

        try:
            user = auth_create_user_and_company(
                db=db,
                email=request.email,
                password=request.password,
                company_name=request.company_name
            )
        except IntegrityError:
            db.rollback()
            raise _email_taken()

        logger.info("Tenant %s opened by %s", user.tenant_id, user.email)
        return SignupResponse(
            user=UserResponse.model_validate(user),
            company=CompanyResponse.model_validate(user.company),
            access_token=AuthService.create_access_token_for_user(user),
            token_type=TOKEN_TYPE
        )

    @staticmethod
    def login_user(db: Session, request: LoginRequest) -> LoginResponse:
        user = auth_authenticate_user(db, request.email, request.password)
        if not user:
            logger.info("Failed login for %s", request.email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return LoginResponse(
            user=UserResponse.model_validate(user),
            access_token=AuthService.create_access_token_for_user(user),
            token_type=TOKEN_TYPE
        )
