from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from devconnect.core.config import Settings
from devconnect.core.errors import InvalidToken

# CryptContext handles password hashing using bcrypt
# 'deprecated="auto"' allows passlib to handle deprecation warnings automatically
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    # bcrypt generates a salt per hash, so equal passwords hash differently
    return pwd_context.hash(password)


class TokenService:
    """
    Issues and verifies signed bearer tokens carrying a user identity.

    Tokens are stateless: there is no server-side revocation list, a token
    stays valid until its ``exp`` claim passes.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256",
                 expires_delta: timedelta = timedelta(hours=100)):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        """Create a JWT whose 'sub' claim is the user id"""
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Decode a token and return the user id it was issued for.

        Raises InvalidToken for every failure mode so callers cannot tell an
        expired token from a forged one.
        """
        try:
            payload = jwt.decode(token, self.secret_key,
                                 algorithms=[self.algorithm])
        except JWTError:
            raise InvalidToken()

        try:
            return int(payload["sub"])
        except (KeyError, ValueError, TypeError):
            raise InvalidToken()
