from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, ConfigDict, EmailStr
from devconnect.core.database import get_db
from devconnect.core.security import TokenService
from devconnect.api.dependencies import get_current_user_id, get_token_service
from devconnect.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    avatar: Optional[str]
    date: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    token: str


@router.get("", response_model=UserResponse)
async def get_current_user_info(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get the authenticated user, without the password hash"""
    return auth_service.get_user(db, user_id)


@router.post("", response_model=Token)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """Authenticate user and get token"""
    token = auth_service.authenticate(
        db, token_service, credentials.email, credentials.password)
    return {"token": token}
