"""
Authentication and tenant resolution.

Passwords are stored as bcrypt hashes. Access tokens are HS256 JWTs whose
``sub`` is the user's email; they also carry ``tenant_id`` and ``role`` for
clients, but each request reloads the user and resolves its tenant from the
database, so a role change applies to tokens already issued.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from passlib.context import CryptContext
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from .models import User, Company
from .db import get_db
from .enums import UserRole
from .core.settings import get_settings

settings = get_settings()
SECRET_KEY = settings.secret_key
ALGORITHM = settings.algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes

TENANT_HEADER = "X-Tenant-Id"

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
security = HTTPBearer()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` as a JWT, valid for ``expires_delta`` or the configured lifetime."""
    lifetime = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {**data, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    """Return the token claims, or None if the signature or expiry is invalid."""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        logger.info("Rejected access token: %s", exc)
        return None


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.email == email).first()
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def create_user_and_company(
    db: Session, email: str, password: str, company_name: str, role: UserRole = UserRole.USER
) -> User:
    """Open a new tenant: the company and its first user, committed together."""
    company = Company(name=company_name.strip())
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        company=company,
    )
    db.add_all([company, user])
    db.commit()
    db.refresh(user)
    return user


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Load the user named by the bearer token's ``sub`` claim."""
    payload = verify_token(credentials.credentials)
    email = payload.get("sub") if payload else None
    user = db.query(User).filter(User.email == email).first() if email else None
    if user is None:
        raise _credentials_error()
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only platform administrators"""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator role required"
        )
    return current_user


def get_tenant_id(
    x_tenant_id: Optional[str] = Header(None, alias=TENANT_HEADER),
    current_user: User = Depends(get_current_user)
) -> str:
    """
    Resolve the tenant a request acts on: the X-Tenant-Id header, else the
    caller's company. Only admins may name a tenant other than their own.
    """
    tenant_id = x_tenant_id.strip() if x_tenant_id else current_user.tenant_id
    if not tenant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing {TENANT_HEADER} header"
        )
    if not current_user.is_admin and tenant_id != current_user.tenant_id:
        logger.warning("User %s denied access to tenant %s", current_user.email, tenant_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access to this tenant is not allowed"
        )
    return tenant_id
