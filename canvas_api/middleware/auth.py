# canvas_api/middleware/auth.py
from fastapi import HTTPException, Depends, status
from fastapi.security.api_key import APIKeyHeader
from sqlalchemy.orm import Session
from datetime import datetime

from canvas_api.db.session import get_db
from canvas_api.models.account import Account
from canvas_api.models.api_key import ApiKey
from canvas_api.core.logging import logger

API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=False)


async def get_api_key(
    api_key_header: str = Depends(API_KEY_HEADER), db: Session = Depends(get_db)
) -> ApiKey:
    """
    Validate the API key and return the associated ApiKey object
    Updates last_used_at timestamp
    """
    if not api_key_header:
        logger.warning("API Key missing from request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API Key is missing",
        )

    api_key = db.query(ApiKey).filter(ApiKey.key == api_key_header).first()

    if not api_key:
        logger.warning(f"Invalid API Key attempt: {api_key_header[:5]}...")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API Key",
        )

    if not api_key.is_active:
        logger.warning(f"Inactive API Key used: {api_key.id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API Key is inactive",
        )

    if api_key.expires_at and api_key.expires_at < datetime.now():
        logger.warning(f"Expired API Key used: {api_key.id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API Key has expired",
        )

    # Update last used timestamp
    api_key.last_used_at = datetime.now()
    db.commit()

    return api_key


async def get_current_account(
    api_key: ApiKey = Depends(get_api_key), db: Session = Depends(get_db)
) -> Account:
    """
    Get the current account based on the API key
    """
    account = db.query(Account).filter(Account.id == api_key.account_id).first()

    if not account:
        logger.error(f"Account not found for API key: {api_key.id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found",
        )

    return account
