from fastapi import APIRouter, Depends, HTTPException, Request, Response, status, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from sqlalchemy import or_
from datetime import datetime, timedelta
from jose import JWTError, jwt
from typing import Optional
import logging
import uuid

from coe_tracker.db.session import get_db
from coe_tracker.config import settings
from coe_tracker.models.user import User
from coe_tracker.schemas.user import UserSync, UserResponse, AccountListResponse, TokenResponse
from coe_tracker.schemas.report import AccountReportRequest, AccountReportResponse
from coe_tracker.services.access import Caller
from coe_tracker.services.account_report_service import AccountReportService

logger = logging.getLogger(__name__)

router = APIRouter()

# OAuth2 scheme for token extraction; the cookie is the fallback transport
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/sync", auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def token_for(user: User) -> str:
    return create_access_token(data={"sub": str(user.id), "role": user.role, "email": user.email})


def split_display_name(display_name: Optional[str]) -> tuple[str, str]:
    """First word is the first name, the rest the last name."""
    parts = (display_name or "").split()
    first_name = parts[0] if parts else "Unknown"
    last_name = " ".join(parts[1:]) or "User"
    return first_name, last_name


def get_or_create_user(
    email: str,
    uid: Optional[str],
    display_name: Optional[str],
    db: Session,
    requested_role: Optional[str] = None,
) -> tuple[User, bool]:
    """Get existing user (by email or uid) or create a new one"""
    conditions = [User.email == email]
    if uid:
        conditions.append(User.uid == uid)
    user = db.query(User).filter(or_(*conditions)).first()
    if user:
        return user, False

    first_name, last_name = split_display_name(display_name)
    if email.lower() in settings.director_emails:
        role = settings.DIRECTOR_ROLE
    elif requested_role and requested_role != settings.DIRECTOR_ROLE:
        role = requested_role
    else:
        # Director is only granted through DIRECTOR_EMAILS
        role = settings.DEFAULT_ROLE
    user = User(email=email, uid=uid, first_name=first_name, last_name=last_name, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {email} with role {role}")
    return user, True


# Dependency for authentication
async def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(oauth2_scheme)
) -> User:
    """
    Validate JWT token (bearer header, else auth cookie) and return current user.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = token or request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise credentials_exception

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception
        user_uuid = uuid.UUID(user_id)
    except (JWTError, ValueError):
        raise credentials_exception

    user = db.query(User).filter(User.id == user_uuid).first()
    if user is None:
        raise credentials_exception

    return user


async def get_caller(current_user: User = Depends(get_current_user)) -> Caller:
    """Resolved identity handed to the services."""
    return Caller.from_user(current_user)


@router.post("/sync", response_model=TokenResponse)
async def sync_user(
    payload: UserSync,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Sync an identity-provider user with the backend and start a session.
    Creates the user on first sight; the token is returned and set as a cookie.
    """
    user, created = get_or_create_user(payload.email, payload.uid, payload.display_name, db, payload.role)
    access_token = token_for(user)

    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        access_token,
        httponly=True,
        samesite="none" if settings.is_production else "lax",
        secure=settings.is_production,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    if created:
        response.status_code = status.HTTP_201_CREATED

    return TokenResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user)
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current authenticated user"""
    return UserResponse.model_validate(current_user)


@router.get("/accounts", response_model=AccountListResponse)
async def list_accounts(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all accounts"""
    users = db.query(User).order_by(User.first_name, User.last_name).all()
    return AccountListResponse(accounts=[UserResponse.model_validate(u) for u in users])


@router.post("/account-report", response_model=AccountReportResponse)
async def generate_account_report(
    body: AccountReportRequest,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Activity report for one account across all owned categories"""
    report = AccountReportService(db).generate_for_caller(caller, body.account_id, body.detailed)
    return AccountReportResponse(**report)


@router.get("/account-report/{account_id}", response_model=AccountReportResponse)
async def get_account_report(
    account_id: str,
    detailed: bool = Query(False),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Same report, addressed by path"""
    report = AccountReportService(db).generate_for_caller(caller, account_id, detailed)
    return AccountReportResponse(**report)
