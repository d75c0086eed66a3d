# canvas_api/db/init_db.py
from sqlalchemy.orm import Session

from canvas_api.core.logging import logger
from canvas_api.core.security import create_api_key
from canvas_api.models.account import Account
from canvas_api.models.api_key import ApiKey
from canvas_api.services.team_service import create_personal_team


def init_db(db: Session) -> None:
    """Initialize the database with seed data"""
    # Check if we already have data
    existing_account = db.query(Account).first()
    if existing_account:
        logger.info("Database already contains data, skipping initialization")
        return

    logger.info("Creating initial data")

    account = Account()
    db.add(account)
    db.flush()  # Flush to get account ID

    api_key = ApiKey(
        key=create_api_key(),
        name="Default API Key",
        is_active=True,
        account_id=account.id
    )
    db.add(api_key)
    db.commit()

    team = create_personal_team(db, account)

    logger.info(f"Created account {account.id} with API key: {api_key.key}")
    logger.info(f"Created personal team: {team.name}")
    logger.info("Initial data created successfully")
