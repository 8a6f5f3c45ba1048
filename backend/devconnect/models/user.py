from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from devconnect.core.database import Base


class User(Base):
    """
    User model representing application users.

    Stores authentication credentials and the display data (name, avatar)
    that posts and comments snapshot at creation time.
    Passwords are stored as hashes (never plaintext).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Email is unique and indexed for fast lookups during login
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    avatar = Column(String, nullable=True)  # Gravatar URL
    date = Column(DateTime(timezone=True), server_default=func.now())
