from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from devconnect.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Post(Base):
    """
    A post with its likes and comments embedded as JSON lists.

    name/avatar are a snapshot of the author taken when the post is created
    and are not updated when the user changes.
    """
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    # Not a foreign key: deleting an account leaves its posts in place
    user_id = Column(Integer, index=True, nullable=False)
    text = Column(Text, nullable=False)
    name = Column(String, nullable=True)
    avatar = Column(String, nullable=True)
    likes = Column(JSON, nullable=False, default=list)  # [{"user": id}]
    comments = Column(JSON, nullable=False, default=list)
    date = Column(DateTime(timezone=True), default=_utcnow, index=True)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
