# canvas_api/models/user.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, UniqueConstraint, func
from sqlalchemy.orm import relationship

from canvas_api.db.session import Base


class User(Base):
    """Membership of an account in a team."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("account_id", "team_id", name="users_account_id_team_id_index"),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=True)
    name = Column(String, nullable=True)
    images = Column(JSON, nullable=False, default=dict)
    slack_id = Column(String, nullable=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    account = relationship("Account", back_populates="users")
    team = relationship("Team", back_populates="users")
