from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, ConfigDict, Field
from devconnect.core.database import get_db
from devconnect.api.dependencies import get_current_user_id
from devconnect.api.validation import NonEmptyStr
from devconnect.services.post_service import post_service

# Every route here is private
router = APIRouter(prefix="/posts", tags=["posts"])


class TextBody(BaseModel):
    text: NonEmptyStr


class LikeEntry(BaseModel):
    user: int


class CommentEntry(BaseModel):
    id: str
    user: int
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime


class PostResponse(BaseModel):
    id: int
    user: int = Field(validation_alias="user_id")
    text: str
    name: Optional[str]
    avatar: Optional[str]
    likes: List[LikeEntry]
    comments: List[CommentEntry]
    date: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    msg: str


@router.post("", response_model=PostResponse)
async def create_post(
    body: TextBody,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create a post"""
    return post_service.create_post(db, user_id, body.text)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get all posts, most recent first"""
    return post_service.list_posts(db)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get post by id"""
    return post_service.get_post(db, post_id)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Delete one of the current user's posts"""
    post_service.delete_post(db, post_id, user_id)
    return {"msg": "Post removed"}


@router.put("/like/{post_id}", response_model=List[LikeEntry])
async def like_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Like a post"""
    return post_service.like_post(db, post_id, user_id)


@router.put("/unlike/{post_id}", response_model=List[LikeEntry])
async def unlike_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Unlike a post"""
    return post_service.unlike_post(db, post_id, user_id)


@router.post("/comment/{post_id}", response_model=PostResponse)
async def add_comment(
    post_id: int,
    body: TextBody,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Comment on a post"""
    return post_service.add_comment(db, post_id, user_id, body.text)


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[CommentEntry])
async def delete_comment(
    post_id: int,
    comment_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Delete one of the current user's comments"""
    return post_service.delete_comment(db, post_id, comment_id, user_id)
