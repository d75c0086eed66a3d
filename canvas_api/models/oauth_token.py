# canvas_api/models/oauth_token.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, func
from sqlalchemy.orm import relationship

from canvas_api.db.session import Base


class OAuthToken(Base):
    __tablename__ = "oauth_tokens"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String, nullable=False)
    provider = Column(String, nullable=False, index=True)
    meta = Column(JSON, nullable=False, default=dict)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    account = relationship("Account", back_populates="oauth_tokens")
    team = relationship("Team", back_populates="oauth_tokens")
