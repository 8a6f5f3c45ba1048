import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from devconnect.core.errors import AlreadyLiked, Forbidden, NotFound, NotLiked
from devconnect.models.post import Post
from devconnect.services.auth_service import auth_service

logger = logging.getLogger(__name__)

POST_NOT_FOUND_MESSAGE = "Post not found"
COMMENT_NOT_FOUND_MESSAGE = "Comment does not exist"


def _liked_by(post: Post, user_id: int) -> bool:
    return any(like.get("user") == user_id for like in post.likes or [])


class PostService:
    """Posts and the likes/comments embedded in them"""

    @staticmethod
    def get_post(db: Session, post_id: int) -> Post:
        post = db.query(Post).filter(Post.id == post_id).first()
        if not post:
            raise NotFound(POST_NOT_FOUND_MESSAGE)
        return post

    @staticmethod
    def list_posts(db: Session) -> List[Post]:
        """All posts, most recent first"""
        return db.query(Post).order_by(Post.date.desc(), Post.id.desc()).all()

    @staticmethod
    def create_post(db: Session, user_id: int, text: str) -> Post:
        author = auth_service.get_user(db, user_id)
        post = Post(
            user_id=user_id,
            text=text,
            name=author.name,
            avatar=author.avatar,
        )
        db.add(post)
        db.commit()
        db.refresh(post)
        logger.info("User %s created post %s", user_id, post.id)
        return post

    @staticmethod
    def delete_post(db: Session, post_id: int, user_id: int) -> None:
        post = PostService.get_post(db, post_id)
        if post.user_id != user_id:
            logger.warning("User %s tried to delete post %s of user %s", user_id, post_id, post.user_id)
            raise Forbidden()
        db.delete(post)
        db.commit()
        logger.info("User %s deleted post %s", user_id, post_id)

    @staticmethod
    def like_post(db: Session, post_id: int, user_id: int) -> List[Dict[str, Any]]:
        """Add the caller's like to the front of the list; one like per user"""
        post = PostService.get_post(db, post_id)
        if _liked_by(post, user_id):
            raise AlreadyLiked()

        post.likes = [{"user": user_id}] + list(post.likes or [])
        db.commit()
        db.refresh(post)
        return post.likes

    @staticmethod
    def unlike_post(db: Session, post_id: int, user_id: int) -> List[Dict[str, Any]]:
        post = PostService.get_post(db, post_id)
        if not _liked_by(post, user_id):
            raise NotLiked()

        post.likes = [like for like in post.likes if like.get("user") != user_id]
        db.commit()
        db.refresh(post)
        return post.likes

    @staticmethod
    def add_comment(db: Session, post_id: int, user_id: int, text: str) -> Post:
        author = auth_service.get_user(db, user_id)
        post = PostService.get_post(db, post_id)

        comment = {
            "id": uuid.uuid4().hex,
            "user": user_id,
            "text": text,
            "name": author.name,
            "avatar": author.avatar,
            "date": datetime.now(timezone.utc).isoformat(),
        }
        post.comments = [comment] + list(post.comments or [])
        db.commit()
        db.refresh(post)
        return post

    @staticmethod
    def delete_comment(db: Session, post_id: int, comment_id: str, user_id: int) -> List[Dict[str, Any]]:
        post = PostService.get_post(db, post_id)

        comment = next((c for c in post.comments or [] if c.get("id") == comment_id), None)
        if comment is None:
            raise NotFound(COMMENT_NOT_FOUND_MESSAGE)
        if comment.get("user") != user_id:
            logger.warning("User %s tried to delete comment %s of user %s",
                           user_id, comment_id, comment.get("user"))
            raise Forbidden()

        post.comments = [c for c in post.comments if c.get("id") != comment_id]
        db.commit()
        db.refresh(post)
        return post.comments


post_service = PostService()
