# canvas_api/models/account.py
from sqlalchemy import Column, Integer, DateTime, func
from sqlalchemy.orm import relationship

from canvas_api.db.session import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    teams = relationship("Team", secondary="users", viewonly=True)
    users = relationship("User", back_populates="account")
    api_keys = relationship("ApiKey", back_populates="account", cascade="all, delete-orphan")
    oauth_tokens = relationship("OAuthToken", back_populates="account")
