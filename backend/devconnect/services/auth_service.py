import hashlib
import logging
from urllib.parse import urlencode
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from devconnect.core.errors import InvalidCredentials, NotFound, ValidationFailed
from devconnect.core.security import TokenService, get_password_hash, verify_password
from devconnect.models.user import User

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User already exists"


def gravatar_url(email: str) -> str:
    """Gravatar URL for an email: 200px, pg rating, mystery-man fallback"""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": "200", "r": "pg", "d": "mm"})
    return f"https://www.gravatar.com/avatar/{digest}?{query}"


class AuthService:
    """Registration, credential checks and account lookup"""

    @staticmethod
    def register_user(
        db: Session,
        token_service: TokenService,
        name: str,
        email: str,
        password: str,
    ) -> str:
        """Create a user and return a token for it"""
        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            raise ValidationFailed.single(USER_EXISTS_MESSAGE, "email")

        user = User(
            name=name,
            email=email,
            avatar=gravatar_url(email),
            hashed_password=get_password_hash(password),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Two registrations for the same email raced past the check above
            db.rollback()
            raise ValidationFailed.single(USER_EXISTS_MESSAGE, "email")
        db.refresh(user)

        logger.info("Registered user %s", user.id)
        return token_service.issue(user.id)

    @staticmethod
    def authenticate(
        db: Session,
        token_service: TokenService,
        email: str,
        password: str,
    ) -> str:
        """
        Check credentials and return a token.

        Unknown email and wrong password fail the same way so the response
        does not reveal which emails are registered.
        """
        user = db.query(User).filter(User.email == email).first()
        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        return token_service.issue(user.id)

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            # Token outlived the account it was issued for
            raise NotFound("User not found")
        return user


auth_service = AuthService()
