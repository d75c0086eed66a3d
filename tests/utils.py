# tests/utils.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from canvas_api.db.base import Base
from canvas_api.models.account import Account
from canvas_api.models.api_key import ApiKey


def make_session():
    """Return an engine and session bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return engine, TestingSession()


def create_account(db, key="canvas_testkey"):
    account = Account()
    db.add(account)
    db.flush()
    db.add(ApiKey(key=key, name="Test Key", is_active=True, account_id=account.id))
    db.commit()
    db.refresh(account)
    return account
