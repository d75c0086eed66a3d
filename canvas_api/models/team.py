# canvas_api/models/team.py
from sqlalchemy import Column, Integer, String, DateTime, JSON, UniqueConstraint, func
from sqlalchemy.orm import relationship

from canvas_api.db.session import Base


class Team(Base):
    """A group of users, either backed by a Slack team or a personal space."""

    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("domain", name="teams_domain_index"),
    )

    id = Column(Integer, primary_key=True, index=True)
    domain = Column(String, nullable=True)
    images = Column(JSON, nullable=False, default=dict)
    name = Column(String, nullable=True)
    slack_id = Column(String, nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    accounts = relationship("Account", secondary="users", viewonly=True)
    canvases = relationship("Canvas", back_populates="team")
    users = relationship("User", back_populates="team")
    oauth_tokens = relationship("OAuthToken", back_populates="team")

    @property
    def is_personal(self) -> bool:
        return self.slack_id is None

    def __repr__(self) -> str:
        return f"<Team {self.domain or self.name}>"
