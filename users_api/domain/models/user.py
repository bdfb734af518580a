"""User domain model — maps to the 'users' table."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from users_api.infrastructure.database import Base

SUBSCRIPTIONS = ("starter", "pro", "business")
DEFAULT_SUBSCRIPTION = "starter"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    subscription = Column(String(20), nullable=False, default=DEFAULT_SUBSCRIPTION)  # starter, pro, business
    avatar_url = Column(String(512), nullable=True)
    verify = Column(Boolean, nullable=False, default=False)
    verification_token = Column(String(64), nullable=True, index=True)
    token = Column(String(1024), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User {self.email}>"
