from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field
from devconnect.core.database import get_db
from devconnect.core.security import TokenService
from devconnect.api.dependencies import get_token_service
from devconnect.api.routes.auth import Token
from devconnect.api.validation import NonEmptyStr
from devconnect.services.auth_service import auth_service

router = APIRouter(prefix="/users", tags=["users"])


class UserCreate(BaseModel):
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(min_length=6)


@router.post("", response_model=Token)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """Register a new user and return a token for it"""
    token = auth_service.register_user(
        db,
        token_service,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )
    return {"token": token}
